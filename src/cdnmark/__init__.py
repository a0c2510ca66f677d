"""Rewrites local image URLs in web content to a CDN image-processing endpoint."""

__version__ = "0.1.0"
