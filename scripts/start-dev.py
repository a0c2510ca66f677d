#!/usr/bin/env python3
"""Start the rewrite service locally with a sample CDN configuration."""

import argparse
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def ensure_dependencies() -> None:
    """Ensure the project is installed with dependencies."""
    try:
        import uvicorn  # noqa: F401

        import cdnmark  # noqa: F401
    except ImportError:
        print("Installing dependencies from pyproject.toml...")
        subprocess.run(
            [sys.executable, "-m", "pip", "install", "-e", str(PROJECT_ROOT)],
            check=True,
        )
        print()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the dev server script."""
    parser = argparse.ArgumentParser(description="Development server startup script.")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    parser.add_argument("--cdn-link", default=None, help="CDN endpoint (default: $CDN_LINK or a placeholder)")
    return parser


def main() -> int:
    """Start the development server. Returns exit code."""
    os.chdir(PROJECT_ROOT)

    args = _build_parser().parse_args()

    ensure_dependencies()

    # Environment defaults for local development
    env = os.environ.copy()
    env.setdefault("DEBUG", "true")
    env.setdefault("UPLOAD_URL", f"http://{args.host}:{args.port}/uploads")
    if args.cdn_link:
        env["CDN_LINK"] = args.cdn_link
    env.setdefault("CDN_LINK", "https://my-source.imgix.net")

    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "cdnmark.main:app",
        f"--host={args.host}",
        f"--port={args.port}",
    ]
    if not args.no_reload:
        cmd.append("--reload")

    print(f"Starting dev server at http://{args.host}:{args.port}")
    print(f"Uploads: {env['UPLOAD_URL']}")
    print(f"CDN: {env['CDN_LINK']}")
    print()

    process = subprocess.Popen(cmd, env=env)
    try:
        return process.wait()
    except KeyboardInterrupt:
        print("\nServer stopped.")
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()
        return 0


if __name__ == "__main__":
    sys.exit(main())
