"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from ghmcp.domain.errors import InvalidOrExpiredError, RateLimitedError
"""

from ghmcp.domain.errors.audit_error import AuditError
from ghmcp.domain.errors.csrf_error import InvalidOrExpiredError
from ghmcp.domain.errors.encryption_error import (
    DecryptionError,
    EncryptionError,
    EncryptionKeyError,
)
from ghmcp.domain.errors.github_oauth_error import GitHubOAuthError
from ghmcp.domain.errors.rate_limit_error import RateLimitedError

__all__ = [
    "AuditError",
    "DecryptionError",
    "EncryptionError",
    "EncryptionKeyError",
    "GitHubOAuthError",
    "InvalidOrExpiredError",
    "RateLimitedError",
]
