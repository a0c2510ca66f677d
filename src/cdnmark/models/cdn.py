"""Models for CDN configuration, srcset candidates and filename dimensions."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from cdnmark.models.url import URL, MalformedURLError


@dataclass(frozen=True)
class CDNTarget:
    """The scheme, host and port that replace the local asset host."""

    scheme: str | None = None
    host: str | None = None
    port: int | None = None

    @classmethod
    def from_url(cls, url: URL) -> "CDNTarget":
        """Keep only the scheme, host and port of a URL."""
        return cls(scheme=url.scheme, host=url.host, port=url.port)


@dataclass(frozen=True)
class DimensionMatch:
    """A ``-{width}x{height}`` suffix found in a filename."""

    base_name: str  # Filename with the suffix removed, extension kept
    width: int
    height: int


class SrcsetCandidate(BaseModel):
    """One entry of a responsive image candidate set."""

    url: str
    descriptor: Literal["w", "x"]
    value: str

    model_config = ConfigDict(frozen=True)


class CDNConfig(BaseModel):
    """Immutable snapshot of the CDN settings handed to every rewrite."""

    enabled: bool = False
    cdn_link: str = ""
    auto_format: bool = False
    auto_enhance: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("cdn_link")
    @classmethod
    def _validate_cdn_link(cls, value: str) -> str:
        if value:
            try:
                URL.decompose(value)
            except MalformedURLError as e:
                raise ValueError(str(e)) from e
        return value

    @property
    def target(self) -> CDNTarget | None:
        """Return the CDN target, or None when no CDN link is set."""
        if not self.cdn_link:
            return None
        return CDNTarget.from_url(URL.decompose(self.cdn_link))

    @property
    def query_params(self) -> str:
        """Return the global imgix parameters added to every CDN URL."""
        auto = []
        if self.auto_format:
            auto.append("format")
        if self.auto_enhance:
            auto.append("enhance")
        if not auto:
            return ""
        return f"auto={','.join(auto)}"
