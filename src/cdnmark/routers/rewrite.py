"""Routes exposing the CDN rewriting to non-Python hosts."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from cdnmark.dependencies import SettingsDep
from cdnmark.models.cdn import SrcsetCandidate
from cdnmark.models.url import URL
from cdnmark.services.hooks import filter_attachment_url, filter_content, filter_image_srcset

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rewrite", tags=["rewrite"])


class UrlPayload(BaseModel):
    url: str


class SrcsetPayload(BaseModel):
    sources: dict[int, SrcsetCandidate]


class HtmlPayload(BaseModel):
    html: str


class ParsedUrl(BaseModel):
    """Decomposed URL parts."""

    scheme: str | None = None
    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None


@router.post("/url")
async def rewrite_url(payload: UrlPayload, settings: SettingsDep) -> UrlPayload:
    """Rewrite a single attachment URL."""
    return UrlPayload(url=filter_attachment_url(payload.url, settings))


@router.post("/srcset")
async def rewrite_srcset(payload: SrcsetPayload, settings: SettingsDep) -> SrcsetPayload:
    """Rewrite every URL of a srcset candidate mapping."""
    return SrcsetPayload(sources=filter_image_srcset(payload.sources, settings))


@router.post("/html")
async def rewrite_html(payload: HtmlPayload, settings: SettingsDep) -> HtmlPayload:
    """Rewrite image URLs inside an HTML fragment."""
    logger.debug("Rewriting %d bytes of HTML", len(payload.html))
    return HtmlPayload(html=filter_content(payload.html, settings))


@router.post("/parse")
async def parse_url(payload: UrlPayload) -> ParsedUrl:
    """
    Split a URL into its parts.

    A malformed URL is reported by the application's MalformedURLError handler.
    """
    url = URL.decompose(payload.url)
    return ParsedUrl(
        scheme=url.scheme,
        user=url.user,
        password=url.password,
        host=url.host,
        port=url.port,
        path=url.path,
        query=url.query,
        fragment=url.fragment,
    )
