"""Mapping of driver and SQLAlchemy exceptions to StorageError.

Infrastructure catches exceptions and maps them to domain errors. The
InfrastructureErrorCode travels in StorageError.details for logs.
"""

from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import StorageError
from ghmcp.infrastructure.enums import InfrastructureErrorCode

STORAGE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    SQLAlchemyError,
    TimeoutError,
    OSError,
)
"""Exceptions that mean "the store failed", as opposed to programming errors."""


def classify(error: BaseException) -> InfrastructureErrorCode:
    """Infrastructure code for a storage exception."""
    if isinstance(error, TimeoutError):
        return InfrastructureErrorCode.DATABASE_TIMEOUT
    if isinstance(error, IntegrityError):
        return InfrastructureErrorCode.DATABASE_CONSTRAINT_VIOLATION
    if isinstance(error, DataError):
        return InfrastructureErrorCode.DATABASE_DATA_ERROR
    if isinstance(error, (OperationalError, InterfaceError, OSError)):
        return InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
    return InfrastructureErrorCode.DATABASE_ERROR


def storage_error_from(error: BaseException, *, operation: str) -> StorageError:
    """Build the StorageError returned for a failed storage operation.

    Args:
        error: The caught exception.
        operation: Component operation that failed (e.g. "session.validate").

    Returns:
        StorageError with the infrastructure code and exception type in details.
        The exception message is left out since drivers may echo bound values.
    """
    infrastructure_code = classify(error)
    return StorageError(
        code=ErrorCode.STORAGE_UNAVAILABLE,
        message=f"Storage unavailable during {operation}",
        operation=operation,
        details={
            "infrastructure_code": infrastructure_code.value,
            "error_type": type(error).__name__,
        },
    )
