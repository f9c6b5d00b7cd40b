"""Audit Logger: append-only security trail with retention.

Recording is best effort by contract: a failed audit write is logged at
error level and never turns a successful operation into a failed one.
Querying and purging report failures through Result as usual. Metadata
that is not a plain JSON document is stored as its string form under
`invalid_metadata` so the entry itself is kept.

Usage:
    await audit_logger.record(
        AuditAction.LOGIN,
        user_id=user.id,
        resource="session",
        client_meta=ClientMeta(ip_address="203.0.113.7"),
    )
"""

from datetime import datetime, timedelta

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.constants import AUDIT_QUERY_MAX_LIMIT
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import ValidationError
from ghmcp.core.result import Failure, Result
from ghmcp.domain.enums import AuditAction
from ghmcp.domain.errors import AuditError
from ghmcp.domain.protocols import AuditEntry, AuditProtocol, LoggerProtocol
from ghmcp.domain.types import Document
from ghmcp.domain.validators import validate_json_document
from ghmcp.domain.value_objects import ClientMeta


class AuditLogger:
    """Front door to the audit trail.

    Args:
        audit: Audit storage adapter.
        logger: Structured logger.
        enabled: When False, record() is a no-op (queries still work).
        clock: Time source for created_at.
    """

    def __init__(
        self,
        audit: AuditProtocol,
        logger: LoggerProtocol,
        *,
        enabled: bool = True,
        clock: Clock = utc_now,
    ) -> None:
        self._audit = audit
        self._logger = logger.bind(component="audit_logger")
        self._enabled = enabled
        self._clock = clock

    async def record(
        self,
        action: AuditAction | str,
        *,
        user_id: int | None = None,
        resource: str | None = None,
        client_meta: ClientMeta | None = None,
        success: bool = True,
        error_message: str | None = None,
        metadata: Document | None = None,
    ) -> None:
        """Append one entry. Never raises and never returns a failure."""
        if not self._enabled:
            return

        action_value = action.value if isinstance(action, AuditAction) else action
        meta = client_meta or ClientMeta.unknown()
        if metadata is not None:
            try:
                validate_json_document(metadata)
            except ValueError as e:
                self._logger.warning(
                    "audit_metadata_invalid",
                    action=action_value,
                    error_message=str(e),
                )
                metadata = {"invalid_metadata": str(metadata)}
        result = await self._audit.record(
            action=action_value,
            created_at=self._clock(),
            user_id=user_id,
            resource=resource,
            ip_address=meta.ip_address,
            user_agent=meta.user_agent,
            success=success,
            error_message=error_message,
            metadata=metadata,
        )
        if isinstance(result, Failure):
            self._logger.error(
                "audit_record_failed",
                action=action_value,
                user_id=user_id,
                error_code=result.error.code.value,
                error_message=result.error.message,
            )

    async def query(
        self,
        *,
        user_id: int | None = None,
        action: AuditAction | str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Result[list[AuditEntry], AuditError | ValidationError]:
        """Entries matching every given filter, newest first.

        `limit` is capped at 1000.
        """
        if limit <= 0 or offset < 0:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="limit must be positive and offset non-negative",
                    field="limit" if limit <= 0 else "offset",
                )
            )
        if start is not None and end is not None and start > end:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="start must not be after end",
                    field="start",
                )
            )

        action_value = action.value if isinstance(action, AuditAction) else action
        return await self._audit.query(
            user_id=user_id,
            action=action_value,
            start=start,
            end=end,
            limit=min(limit, AUDIT_QUERY_MAX_LIMIT),
            offset=offset,
        )

    async def purge_older_than(self, cutoff: datetime) -> Result[int, AuditError]:
        """Delete entries created before `cutoff`."""
        result = await self._audit.purge_before(cutoff)
        match result:
            case Failure(error=error):
                self._logger.error(
                    "audit_purge_failed",
                    cutoff=cutoff.isoformat(),
                    error_code=error.code.value,
                )
            case _:
                self._logger.info(
                    "audit_purged", cutoff=cutoff.isoformat(), deleted=result.value
                )
        return result

    async def purge_expired(self, retention: timedelta) -> Result[int, AuditError]:
        """Delete entries older than `retention` (90 days by default config)."""
        return await self.purge_older_than(self._clock() - retention)
