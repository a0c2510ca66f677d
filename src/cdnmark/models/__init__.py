"""Value types for URLs and CDN settings."""
