"""User repository protocol for persistence abstraction.

Users are the identity anchor every other table keys onto. They are
created on the first successful OAuth callback and updated on later
logins; this subsystem never deletes them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(slots=True, kw_only=True)
class UserData:
    """Data transfer object for user persistence.

    Attributes:
        id: Surrogate identifier.
        github_id: GitHub account id (unique).
        username: GitHub login.
        name: Display name.
        email: Public email.
        avatar_url: Avatar image URL.
        created_at: When the user first logged in.
        updated_at: When the profile was last refreshed.
    """

    id: int
    github_id: int
    username: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserRepository(Protocol):
    """User repository protocol (port) for persistence."""

    async def upsert_github_user(
        self,
        *,
        github_id: int,
        username: str,
        name: str | None,
        email: str | None,
        avatar_url: str | None,
        now: datetime,
    ) -> UserData:
        """Insert a user on first login, refresh display fields afterwards.

        Args:
            github_id: GitHub account id (conflict key).
            username: GitHub login.
            name: Display name.
            email: Public email.
            avatar_url: Avatar image URL.
            now: Timestamp for created_at/updated_at.

        Returns:
            The stored user.
        """
        ...

    async def find_by_id(self, user_id: int) -> UserData | None:
        """Find user by surrogate id."""
        ...
