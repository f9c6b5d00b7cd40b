"""GitHub adapters."""

from ghmcp.infrastructure.github.oauth_client import GitHubOAuthClient

__all__ = ["GitHubOAuthClient"]
