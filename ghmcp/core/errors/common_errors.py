"""Common error classes used across all components.

These are generic errors that don't belong to any single component.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Entity absent
- ConflictError: Concurrent write conflicts
- ExpiredError: Entity present but past its validity
- UnauthenticatedError: No or unknown session
- StorageError: Underlying store unavailable or timed out

Usage:
    from ghmcp.core.errors import NotFoundError
    from ghmcp.core.enums import ErrorCode
    from ghmcp.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.CREDENTIAL_NOT_FOUND,
        message="No GitHub credential stored for user",
        resource_type="credential",
        resource_id=str(user_id),
    ))
"""

from dataclasses import dataclass
from datetime import datetime

from ghmcp.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Entity not found.

    Attributes:
        resource_type: Type of resource (credential, workflow_state, etc.).
        resource_id: Identifier of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Write conflict (stale version, duplicate).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (version, etc.).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExpiredError(DomainError):
    """Entity present but past its validity.

    Attributes:
        resource_type: Type of resource (credential, session).
        expired_at: When the entity stopped being valid.
    """

    resource_type: str
    expired_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UnauthenticatedError(DomainError):
    """No valid session accompanies the request."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageError(DomainError):
    """The shared store is unavailable or timed out.

    Distinct from business errors: the answer is unknown, not "no".

    Attributes:
        operation: Component operation that hit the failure.
    """

    operation: str | None = None
