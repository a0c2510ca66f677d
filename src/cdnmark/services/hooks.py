"""Callbacks a host content pipeline attaches to its url, srcset and content filters."""

import logging
import re
from collections.abc import Mapping
from typing import Any

from cdnmark.config import Settings
from cdnmark.models.cdn import SrcsetCandidate
from cdnmark.services.url_rewriter import rewrite_attachment_url, rewrite_html, rewrite_srcset

logger = logging.getLogger(__name__)

IMAGE_EXTENSION_PATTERN = re.compile(r"\.(?:jpe?g|gif|png|webp)$", re.IGNORECASE)


def is_image_url(url: str) -> bool:
    """Check if a URL path ends in a known image extension."""
    path = url.split("#", 1)[0].split("?", 1)[0]
    return IMAGE_EXTENSION_PATTERN.search(path) is not None


def filter_attachment_url(url: str, settings: Settings) -> str:
    """Rewrite an attachment URL to the CDN, leaving non-image attachments local."""
    if not is_image_url(url):
        logger.debug("Skipping non-image attachment %s", url)
        return url
    return rewrite_attachment_url(url, settings.cdn_config)


def filter_image_srcset(
    sources: Mapping[int, SrcsetCandidate | Mapping[str, Any]],
    settings: Settings,
) -> dict[int, Any]:
    """
    Rewrite a srcset candidate mapping.

    Plain dict entries come back as plain dicts, model entries as models.

    Args:
        sources: Candidates keyed by width or density
        settings: Application settings

    Returns:
        The rewritten candidates in input key order
    """
    candidates = {
        key: source if isinstance(source, SrcsetCandidate) else SrcsetCandidate.model_validate(source)
        for key, source in sources.items()
    }
    rewritten = rewrite_srcset(candidates, settings.cdn_config)

    result: dict[int, Any] = {}
    for key, source in sources.items():
        if isinstance(source, SrcsetCandidate):
            result[key] = rewritten[key]
        else:
            result[key] = {**source, "url": rewritten[key].url}
    return result


def filter_content(html: str, settings: Settings) -> str:
    """Rewrite images in rendered content that did not come through the attachment pipeline."""
    result = rewrite_html(html, settings.cdn_config, settings.upload_url)
    if result != html:
        logger.debug("Rewrote image URLs in content (%d bytes)", len(html))
    return result
