"""Audit log database model for security monitoring.

This table is APPEND-ONLY. The application has no update path for it;
the only deletion is the retention purge run by maintenance.
"""

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.domain.types import Document
from ghmcp.infrastructure.persistence.base import BaseModel
from ghmcp.infrastructure.persistence.types import IdType, JsonDocument


class AuditLog(BaseModel):
    """Audit log model - append-only.

    Fields:
        id: Integer primary key, monotonic (from BaseModel)
        created_at: When the event was recorded (from BaseModel, indexed)
        user_id: Actor (nullable; set to NULL when the user is deleted)
        action: What happened (e.g. "login", "push", "rate_limited")
        resource: What it was done to
        ip_address: Client address
        user_agent: Client user agent
        success: Outcome
        error_message: Failure reason
        event_metadata: JSON document (column "metadata")

    Note:
        This model inherits from BaseModel (NOT BaseMutableModel) because
        audit rows never change and have no updated_at.
    """

    __tablename__ = "audit_logs"

    user_id: Mapped[int | None] = mapped_column(
        IdType,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="User who performed the action (None for anonymous actors)",
    )

    action: Mapped[str] = mapped_column(String(100), nullable=False)

    resource: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    ip_address: Mapped[str | None] = mapped_column(
        String(45), nullable=True, default=None
    )

    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    success: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    error_message: Mapped[str | None] = mapped_column(
        Text, nullable=True, default=None
    )

    # "metadata" is reserved on declarative classes
    event_metadata: Mapped[Document | None] = mapped_column(
        "metadata",
        JsonDocument,
        nullable=True,
        default=None,
    )

    __table_args__ = (Index("ix_audit_logs_created_at", "created_at"),)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AuditLog("
            f"id={self.id}, "
            f"action={self.action!r}, "
            f"user_id={self.user_id}, "
            f"created_at={self.created_at}"
            f")>"
        )
