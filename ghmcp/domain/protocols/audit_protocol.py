"""Audit trail protocol (port) for security monitoring.

Infrastructure adapters implement this protocol to provide concrete audit
storage. The AuditLogger application service wraps it so that a failed
audit write is logged and never breaks the primary operation.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides ADAPTERS (DatabaseAuditAdapter)
- Application layer uses the protocol (doesn't know about specific adapters)

Retention:
    Entries are append-only. The only deletion path is purge_before(),
    driven by the 90-day retention job.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ghmcp.core.result import Result
from ghmcp.domain.errors import AuditError
from ghmcp.domain.types import Document


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditEntry:
    """One immutable audit record.

    Attributes:
        id: Surrogate identifier (monotonic insertion order).
        action: What happened.
        user_id: Who did it, if known. Cleared when the user is removed.
        resource: What it was done to.
        ip_address: Client address.
        user_agent: Client user agent.
        success: Outcome.
        error_message: Failure reason when success is False.
        metadata: Free-form JSON document.
        created_at: When it was recorded.
    """

    id: int
    action: str
    user_id: int | None
    resource: str | None
    ip_address: str | None
    user_agent: str | None
    success: bool
    error_message: str | None
    metadata: Document | None
    created_at: datetime


class AuditProtocol(Protocol):
    """Protocol for audit trail storage.

    Error Handling:
        All methods return Result types (Success or Failure).
        NEVER raise exceptions - wrap in Failure(AuditError(...)) instead.
    """

    async def record(
        self,
        *,
        action: str,
        created_at: datetime,
        user_id: int | None = None,
        resource: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        success: bool = True,
        error_message: str | None = None,
        metadata: Document | None = None,
    ) -> Result[None, AuditError]:
        """Append one audit entry.

        Args:
            action: What happened (AuditAction value or free-form string).
            created_at: Timestamp of the event.
            user_id: Who performed the action. None for anonymous/system actions.
            resource: What was affected (e.g. "owner/repo#branch").
            ip_address: Client address.
            user_agent: Client user agent.
            success: Outcome.
            error_message: Failure reason.
            metadata: Extra JSON context.

        Returns:
            Success(None) when committed, Failure(AuditError) otherwise.
        """
        ...

    async def query(
        self,
        *,
        user_id: int | None = None,
        action: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Result[list[AuditEntry], AuditError]:
        """Query the audit trail, newest first.

        Args:
            user_id: Filter by actor.
            action: Filter by action.
            start: Lower bound on created_at (inclusive).
            end: Upper bound on created_at (inclusive).
            limit: Maximum rows (callers cap it at 1000).
            offset: Rows to skip.

        Returns:
            Success(entries), possibly empty, or Failure(AuditError).
        """
        ...

    async def purge_before(self, cutoff: datetime) -> Result[int, AuditError]:
        """Delete entries created before `cutoff`.

        Returns:
            Success(number of deleted entries) or Failure(AuditError).
        """
        ...
