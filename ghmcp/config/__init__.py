"""Application-specific configuration (endpoint rate limit rules)."""
