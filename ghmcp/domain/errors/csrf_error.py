"""CSRF state token error.

The OAuth callback does not distinguish an unknown state token from an
expired one: both mean the redirect cannot be trusted.

Usage:
    from ghmcp.domain.errors import InvalidOrExpiredError
    from ghmcp.core.enums import ErrorCode
    from ghmcp.core.result import Failure

    return Failure(error=InvalidOrExpiredError(
        code=ErrorCode.CSRF_TOKEN_INVALID,
        message="CSRF state token is invalid or expired",
    ))
"""

from dataclasses import dataclass

from ghmcp.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidOrExpiredError(DomainError):
    """CSRF state token absent, already consumed, or past expiry."""

    pass
