"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cdnmark.models.cdn import CDNConfig
from cdnmark.models.url import URL, MalformedURLError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # CDN configuration
    cdn_link: str = ""  # e.g. "https://my-source.imgix.net"
    cdn_enabled: bool = True

    # URL prefix of locally managed uploads, e.g. "https://example.org/uploads"
    upload_url: str = ""

    # Global imgix parameters
    auto_format: bool = False
    auto_enhance: bool = False

    # Debug mode
    debug: bool = False

    @field_validator("cdn_link")
    @classmethod
    def _normalize_cdn_link(cls, value: str) -> str:
        value = value.strip()
        if value and "://" not in value and not value.startswith("//"):
            value = f"https://{value}"
        if value:
            try:
                URL.decompose(value)
            except MalformedURLError as e:
                raise ValueError(str(e)) from e
        return value

    @property
    def is_cdn_active(self) -> bool:
        """Check if URLs should be rewritten to the CDN."""
        return self.cdn_enabled and bool(self.cdn_link)

    @property
    def cdn_config(self) -> CDNConfig:
        """Return an immutable snapshot of the CDN settings."""
        return CDNConfig(
            enabled=self.is_cdn_active,
            cdn_link=self.cdn_link,
            auto_format=self.auto_format,
            auto_enhance=self.auto_enhance,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
