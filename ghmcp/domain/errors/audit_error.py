"""Audit trail error types.

Used when audit trail recording or querying fails. The AuditLogger service
never hands this error to the audited operation; it only logs it.
"""

from dataclasses import dataclass

from ghmcp.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit system failure (database error, connection loss)."""

    pass
