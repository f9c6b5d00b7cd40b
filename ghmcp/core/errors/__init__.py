"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from ghmcp.core.errors import DomainError, NotFoundError, StorageError
"""

from ghmcp.core.errors.common_errors import (
    ConflictError,
    ExpiredError,
    NotFoundError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)
from ghmcp.core.errors.domain_error import DomainError

__all__ = [
    "ConflictError",
    "DomainError",
    "ExpiredError",
    "NotFoundError",
    "StorageError",
    "UnauthenticatedError",
    "ValidationError",
]
