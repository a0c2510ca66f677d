"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from cdnmark import __version__
from cdnmark.config import get_settings
from cdnmark.dependencies import SettingsDep
from cdnmark.models.url import MalformedURLError
from cdnmark.routers import rewrite

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("cdnmark")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    settings = get_settings()

    # Startup
    logger.info("Starting cdnmark")
    if settings.is_cdn_active:
        logger.info("Rewriting uploads under %s to %s", settings.upload_url or "(none)", settings.cdn_link)
    else:
        logger.info("CDN disabled, URLs pass through unchanged")

    yield

    # Shutdown
    logger.info("Shutting down cdnmark")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="cdnmark",
        description="Rewrites local image URLs to an imgix-style CDN endpoint",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    @app.exception_handler(MalformedURLError)
    async def malformed_url_handler(request: Request, exc: MalformedURLError):
        """Report unparseable URLs as a client error."""
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with a JSON body."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled exception: {exc}")

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc), "type": type(exc).__name__},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    @app.get("/config")
    async def show_config(current: SettingsDep) -> dict[str, str | bool]:
        """Show the CDN settings currently in effect."""
        return {
            "enabled": current.is_cdn_active,
            "cdn_link": current.cdn_link,
            "upload_url": current.upload_url,
            "auto_format": current.auto_format,
            "auto_enhance": current.auto_enhance,
        }

    app.include_router(rewrite.router)

    return app


# Create the application instance
app = create_app()
