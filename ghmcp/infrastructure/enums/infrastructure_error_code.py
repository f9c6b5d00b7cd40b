"""Infrastructure-specific error codes.

These are internal codes for tracking infrastructure failures. They travel
in the `details` of the domain error they are mapped to (StorageError,
GitHubOAuthError), so logs say which kind of failure happened without the
domain layer knowing about drivers.

Categories:
- Database errors (DATABASE_*)
- External service errors (EXTERNAL_SERVICE_*)
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Database errors
    DATABASE_CONNECTION_FAILED = "database_connection_failed"
    DATABASE_TIMEOUT = "database_timeout"
    DATABASE_CONSTRAINT_VIOLATION = "database_constraint_violation"
    DATABASE_DATA_ERROR = "database_data_error"
    DATABASE_ERROR = "database_error"

    # External service errors
    EXTERNAL_SERVICE_UNAVAILABLE = "external_service_unavailable"
    EXTERNAL_SERVICE_TIMEOUT = "external_service_timeout"
    EXTERNAL_SERVICE_ERROR = "external_service_error"
