"""Jinja2 filters exposing the CDN rewriting to templates."""

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment
from markupsafe import Markup

from cdnmark.config import Settings
from cdnmark.services.hooks import filter_attachment_url, filter_content, filter_image_srcset


def format_srcset(sources: Mapping[int, Any]) -> str:
    """Render srcset candidates as an HTML srcset attribute value."""
    entries = []
    for source in sources.values():
        if isinstance(source, Mapping):
            url, descriptor, value = source["url"], source["descriptor"], source["value"]
        else:
            url, descriptor, value = source.url, source.descriptor, source.value
        entries.append(f"{url} {value}{descriptor}")
    return ", ".join(entries)


def register_filters(env: Environment, settings: Settings) -> None:
    """Register the CDN filters on a Jinja2 environment."""

    def cdn_url(value: str) -> str:
        if not value:
            return ""
        return filter_attachment_url(value, settings)

    def cdn_srcset(value: Mapping[int, Any]) -> str:
        if not value:
            return ""
        return format_srcset(filter_image_srcset(value, settings))

    def cdn_content(value: str) -> Markup:
        if not value:
            return Markup("")
        return Markup(filter_content(str(value), settings))

    env.filters["cdn_url"] = cdn_url
    env.filters["cdn_srcset"] = cdn_srcset
    env.filters["cdn_content"] = cdn_content
