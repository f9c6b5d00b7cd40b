"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for domain-level error handling
- Settings and the composition root

The core module has NO dependencies on other application layers
(the container is the single exception, imported explicitly).
"""

from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import (
    ConflictError,
    DomainError,
    ExpiredError,
    NotFoundError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)
from ghmcp.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "ExpiredError",
    "Failure",
    "NotFoundError",
    "Result",
    "StorageError",
    "Success",
    "UnauthenticatedError",
    "ValidationError",
]
