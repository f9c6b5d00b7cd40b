"""User database model (identity anchor).

Every other table that belongs to a person keys onto users.id. Rows are
created on the first successful OAuth callback and refreshed on later
logins; deleting one cascades to credentials, sessions and workflow
states and nulls out the user's audit rows.
"""

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """GitHub user known to the server.

    Fields:
        id: Integer primary key (from BaseMutableModel)
        created_at: First login (from BaseMutableModel)
        updated_at: Last profile refresh (from BaseMutableModel)
        github_id: GitHub account id (unique)
        username: GitHub login
        name: Display name
        email: Public email
        avatar_url: Avatar image URL
    """

    __tablename__ = "users"

    github_id: Mapped[int] = mapped_column(
        BigInteger,
        unique=True,
        nullable=False,
        comment="GitHub account id",
    )

    username: Mapped[str] = mapped_column(
        String(39),
        nullable=False,
        comment="GitHub login",
    )

    name: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)

    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<User(id={self.id}, github_id={self.github_id}, "
            f"username={self.username!r})>"
        )
