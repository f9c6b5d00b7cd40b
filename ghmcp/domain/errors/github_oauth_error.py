"""GitHub OAuth error types.

Returned by GitHubOAuthProtocol implementations when the token exchange,
refresh or user lookup fails.
"""

from dataclasses import dataclass

from ghmcp.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class GitHubOAuthError(DomainError):
    """GitHub rejected the request or could not be reached.

    Attributes:
        status_code: HTTP status returned by GitHub, if any.
        is_transient: True for timeouts and 5xx responses (safe to retry).
    """

    status_code: int | None = None
    is_transient: bool = False
