"""Database implementation of AuditProtocol.

This adapter provides append-only audit logging with:
- Its own transaction per write, so an audit row survives a rollback of
  the work being audited
- Async SQLAlchemy for database operations
- Result types for error handling (no exceptions)
- JSON storage for the metadata document

Following hexagonal architecture:
- Infrastructure implements domain protocol (AuditProtocol)
- Domain doesn't know about SQLAlchemy
- Easy to swap implementations (in-memory for testing)

Immutability:
    There is no update path. The only delete is purge_before(), used by
    the retention job.

Usage:
    from ghmcp.infrastructure.audit import DatabaseAuditAdapter

    adapter = DatabaseAuditAdapter(database)
    result = await adapter.record(
        action="login",
        user_id=user_id,
        resource="session",
        ip_address="192.168.1.1",
        created_at=now,
    )
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ghmcp.core.constants import AUDIT_QUERY_MAX_LIMIT
from ghmcp.core.enums import ErrorCode
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.errors import AuditError
from ghmcp.domain.protocols import AuditEntry
from ghmcp.domain.types import Document
from ghmcp.infrastructure.persistence.database import Database
from ghmcp.infrastructure.persistence.models.audit_log import AuditLog


class DatabaseAuditAdapter:
    """SQLAlchemy implementation of AuditProtocol.

    This adapter is stateless - all state lives in the database. Each
    call opens and commits its own session.

    Attributes:
        database: Shared Database.
    """

    def __init__(self, database: Database) -> None:
        """Initialize adapter with the shared Database.

        Args:
            database: Database whose sessions the adapter opens per call.
        """
        self.database = database

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
            action: What happened.
            created_at: Event timestamp.
            user_id: Actor (None for anonymous actors).
            resource: What was affected.
            ip_address: Client address.
            user_agent: Client user agent.
            success: Outcome.
            error_message: Failure reason.
            metadata: Extra JSON context.

        Returns:
            Result[None, AuditError]:
                - Success(None) if the entry was committed
                - Failure(AuditError) if the database operation failed

        An actor id with no users row is kept in metadata as
        `unresolved_user_id` and the entry is stored without the actor.
        """
        entry: dict[str, Any] = {
            "action": action,
            "user_id": user_id,
            "resource": resource,
            "ip_address": ip_address,
            "user_agent": user_agent,
            "success": success,
            "error_message": error_message,
            "event_metadata": metadata,
            "created_at": created_at,
        }
        try:
            try:
                await self._insert(entry)
            except IntegrityError:
                if user_id is None:
                    raise
                entry["user_id"] = None
                entry["event_metadata"] = {
                    **(metadata or {}),
                    "unresolved_user_id": user_id,
                }
                await self._insert(entry)
            return Success(value=None)

        except (SQLAlchemyError, TimeoutError, OSError) as e:
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message="Failed to record audit log",
                    details={
                        "action": action,
                        "error_type": type(e).__name__,
                    },
                )
            )

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
        """Query audit trail (read-only), newest first.

        Args:
            user_id: Filter by actor (None = all users).
            action: Filter by action (None = all actions).
            start: From timestamp inclusive (None = no lower bound).
            end: To timestamp inclusive (None = no upper bound).
            limit: Maximum results (capped at 1000).
            offset: Pagination offset.

        Returns:
            Result[list[AuditEntry], AuditError]:
                - Success(entries) if query succeeded (list may be empty)
                - Failure(AuditError) if database operation failed
        """
        limit = max(0, min(limit, AUDIT_QUERY_MAX_LIMIT))
        query = select(AuditLog)

        if user_id is not None:
            query = query.where(AuditLog.user_id == user_id)

        if action is not None:
            query = query.where(AuditLog.action == action)

        if start is not None:
            query = query.where(AuditLog.created_at >= start)

        if end is not None:
            query = query.where(AuditLog.created_at <= end)

        # Newest first; id breaks ties between rows with the same timestamp
        query = (
            query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
            .offset(max(0, offset))
        )

        try:
            async with self.database.get_session() as session:
                result = await session.execute(query)
                audit_logs = result.scalars().all()
        except (SQLAlchemyError, TimeoutError, OSError) as e:
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_QUERY_FAILED,
                    message="Failed to query audit logs",
                    details={"error_type": type(e).__name__},
                )
            )

        return Success(value=[self._to_entry(log) for log in audit_logs])

    async def purge_before(self, cutoff: datetime) -> Result[int, AuditError]:
        """Delete entries created before `cutoff` (retention).

        Returns:
            Success(number of deleted rows) or Failure(AuditError).
        """
        stmt = (
            delete(AuditLog)
            .where(AuditLog.created_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.database.get_session() as session:
                result = await session.execute(stmt)
        except (SQLAlchemyError, TimeoutError, OSError) as e:
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_PURGE_FAILED,
                    message="Failed to purge audit logs",
                    details={"error_type": type(e).__name__},
                )
            )
        return Success(value=cast(Any, result).rowcount or 0)

    async def _insert(self, entry: dict[str, Any]) -> None:
        async with self.database.get_session() as session:
            session.add(AuditLog(**entry))

    def _to_entry(self, log: AuditLog) -> AuditEntry:
        return AuditEntry(
            id=log.id,
            action=log.action,
            user_id=log.user_id,
            resource=log.resource,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            success=log.success,
            error_message=log.error_message,
            metadata=log.event_metadata,
            created_at=log.created_at,
        )
