"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from cdnmark.models.cdn import CDNConfig, CDNTarget, SrcsetCandidate


class TestCDNConfig:
    """Tests for the CDN settings snapshot."""

    def test_defaults_disabled(self):
        config = CDNConfig()
        assert config.enabled is False
        assert config.target is None

    def test_target_from_link(self):
        config = CDNConfig(enabled=True, cdn_link="https://my-source.imgix.com:8443/ignored/path?x=1")
        assert config.target == CDNTarget(scheme="https", host="my-source.imgix.com", port=8443)

    def test_target_without_port(self):
        config = CDNConfig(enabled=True, cdn_link="https://my-source.imgix.com")
        assert config.target == CDNTarget(scheme="https", host="my-source.imgix.com", port=None)

    def test_malformed_link_rejected(self):
        with pytest.raises(ValidationError):
            CDNConfig(enabled=True, cdn_link="http://[::1")

    def test_disabled_tolerates_missing_link(self):
        assert CDNConfig(enabled=False, cdn_link="").target is None

    def test_frozen(self):
        config = CDNConfig(enabled=True, cdn_link="https://cdn.example")
        with pytest.raises(ValidationError):
            config.cdn_link = "https://other.example"

    def test_query_params(self):
        assert CDNConfig().query_params == ""
        assert CDNConfig(auto_format=True).query_params == "auto=format"
        assert CDNConfig(auto_enhance=True).query_params == "auto=enhance"
        assert CDNConfig(auto_format=True, auto_enhance=True).query_params == "auto=format,enhance"


class TestSrcsetCandidate:
    """Tests for srcset candidate validation."""

    def test_accepts_width_and_density(self):
        assert SrcsetCandidate(url="a.png", descriptor="w", value="400").descriptor == "w"
        assert SrcsetCandidate(url="a.png", descriptor="x", value="2").descriptor == "x"

    def test_rejects_unknown_descriptor(self):
        with pytest.raises(ValidationError):
            SrcsetCandidate(url="a.png", descriptor="h", value="400")
