"""URL rewriting services and host integrations."""
