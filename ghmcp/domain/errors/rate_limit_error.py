"""Rate limit error types.

RateLimitedError is the quota rejection returned by the rate limiter.
Storage failures while counting are reported as StorageError instead,
so callers can tell "too many requests" from "could not count".

Usage:
    from ghmcp.domain.errors import RateLimitedError
    from ghmcp.core.enums import ErrorCode
    from ghmcp.core.result import Failure

    return Failure(error=RateLimitedError(
        code=ErrorCode.RATE_LIMIT_EXCEEDED,
        message="Rate limit exceeded",
        endpoint="push",
        limit=3,
        retry_after=42,
    ))
"""

from dataclasses import dataclass

from ghmcp.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitedError(DomainError):
    """Request quota exceeded for the current window.

    Attributes:
        endpoint: Endpoint whose quota was exceeded.
        limit: Requests allowed per window.
        retry_after: Seconds until the current window ends.
    """

    endpoint: str
    limit: int
    retry_after: int
