"""GitHub token database model (encrypted credential).

One row per user, enforced by the unique user_id. Token columns only ever
hold AES-256-GCM ciphertext.
"""

from datetime import datetime

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.infrastructure.persistence.base import BaseMutableModel
from ghmcp.infrastructure.persistence.types import IdType, UTCDateTime


class GitHubToken(BaseMutableModel):
    """Encrypted GitHub OAuth credential of one user.

    Fields:
        user_id: Owning user (unique, cascade delete)
        username: GitHub login at exchange time
        encrypted_token: Encrypted access token
        encrypted_refresh_token: Encrypted refresh token (nullable)
        expires_at: Access token expiry (indexed)
    """

    __tablename__ = "github_tokens"

    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        comment="User who owns this credential",
    )

    username: Mapped[str] = mapped_column(String(39), nullable=False)

    encrypted_token: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="AES-256-GCM encrypted access token",
    )

    encrypted_refresh_token: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="AES-256-GCM encrypted refresh token",
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation without token material."""
        return (
            f"<GitHubToken(id={self.id}, user_id={self.user_id}, "
            f"expires_at={self.expires_at})>"
        )
