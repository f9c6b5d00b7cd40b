"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `ghmcp/core/config.py` instead.

Example:
    >>> from ghmcp.core.constants import CSRF_TOKEN_BYTES
    >>> token = secrets.token_hex(CSRF_TOKEN_BYTES)
"""

# =============================================================================
# Token and Key Lengths
# =============================================================================

CSRF_TOKEN_BYTES: int = 32
"""Random bytes in a CSRF state token (hex-encoded to 64 characters)."""

SESSION_TOKEN_BYTES: int = 32
"""Random bytes in a session bearer token (URL-safe base64 encoded)."""

AES_KEY_LENGTH: int = 32
"""AES-256 encryption key length in bytes."""


# =============================================================================
# GitHub OAuth
# =============================================================================

GITHUB_OAUTH_SCOPES: tuple[str, ...] = ("repo", "read:user", "read:project")
"""Scopes requested when a login flow starts."""

GITHUB_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for GitHub HTTP calls in seconds."""

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length of a response body kept in error details."""


# =============================================================================
# Query Limits
# =============================================================================

AUDIT_QUERY_MAX_LIMIT: int = 1000
"""Upper bound on audit rows returned by a single query."""
