"""Session database model (bearer credential).

Sessions are hard-deleted on logout and by the maintenance purge; an
expired row that has not been purged yet must still never authorize a
request, which the repository enforces in its update predicate.
"""

from datetime import datetime

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.infrastructure.persistence.base import BaseModel
from ghmcp.infrastructure.persistence.types import IdType, UTCDateTime


class Session(BaseModel):
    """Authenticated session.

    Fields:
        id: Integer primary key (from BaseModel)
        created_at: When the session was created (from BaseModel)
        user_id: Owning user (cascade delete, indexed)
        session_token: Opaque bearer token (unique)
        expires_at: Absolute expiry (indexed)
        last_used_at: Last successful validation
        ip_address: Client address at creation
        user_agent: Client user agent at creation
    """

    __tablename__ = "sessions"

    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns this session",
    )

    session_token: Mapped[str] = mapped_column(
        String(128),
        unique=True,
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )

    last_used_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # IPv6 max length
    ip_address: Mapped[str | None] = mapped_column(
        String(45), nullable=True, default=None
    )

    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    def __repr__(self) -> str:
        """String representation without the token."""
        return (
            f"<Session(id={self.id}, user_id={self.user_id}, "
            f"expires_at={self.expires_at})>"
        )
