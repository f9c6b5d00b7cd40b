"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_CONFLICT)
- Expiry and authentication errors (*_EXPIRED, *_INVALID)
- Quota errors (RATE_LIMIT_*)
- Storage errors (STORAGE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_REPOSITORY = "invalid_repository"
    INVALID_BRANCH = "invalid_branch"
    INVALID_INPUT = "invalid_input"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    REFRESH_TOKEN_NOT_FOUND = "refresh_token_not_found"
    WORKFLOW_STATE_NOT_FOUND = "workflow_state_not_found"

    # Conflict errors
    WORKFLOW_STATE_CONFLICT = "workflow_state_conflict"

    # Expiry errors
    CREDENTIAL_EXPIRED = "credential_expired"
    SESSION_EXPIRED = "session_expired"

    # Authentication errors
    SESSION_INVALID = "session_invalid"
    CSRF_TOKEN_INVALID = "csrf_token_invalid"

    # Quota errors
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"

    # Storage errors
    STORAGE_UNAVAILABLE = "storage_unavailable"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
    AUDIT_QUERY_FAILED = "audit_query_failed"
    AUDIT_PURGE_FAILED = "audit_purge_failed"

    # Encryption errors
    ENCRYPTION_KEY_INVALID = "encryption_key_invalid"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"

    # GitHub OAuth errors
    GITHUB_OAUTH_FAILED = "github_oauth_failed"
    GITHUB_UNAVAILABLE = "github_unavailable"

    @property
    def is_authentication_failure(self) -> bool:
        """Whether the outer layer should present this code as an auth failure.

        Expired sessions and CSRF tokens read as authentication failures.
        Rate limit rejections are excluded so clients back off instead of
        re-authenticating.

        Returns:
            bool: True for session and CSRF failures.
        """
        return self in _AUTHENTICATION_FAILURES


_AUTHENTICATION_FAILURES = frozenset(
    {
        ErrorCode.SESSION_INVALID,
        ErrorCode.SESSION_EXPIRED,
        ErrorCode.CSRF_TOKEN_INVALID,
    }
)
