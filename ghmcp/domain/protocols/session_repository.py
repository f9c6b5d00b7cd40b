"""Session repository protocol for persistence abstraction.

Sessions are opaque bearer tokens mapped to a user with an absolute
expiry. Validation is a single conditional update so a session can
never be "touched" after it has expired.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(slots=True, kw_only=True)
class SessionData:
    """Data transfer object for session persistence.

    Attributes:
        session_token: Opaque bearer token (unique).
        user_id: Owning user.
        expires_at: Absolute expiry.
        last_used_at: Last successful validation.
        ip_address: Client address at creation.
        user_agent: Client user agent at creation.
        created_at: When the session was created.
        id: Surrogate identifier, assigned by the store.
    """

    session_token: str
    user_id: int
    expires_at: datetime
    last_used_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None
    id: int | None = None


class SessionRepository(Protocol):
    """Session repository protocol (port) for persistence."""

    async def add(self, session_data: SessionData) -> SessionData:
        """Insert a new session.

        Returns:
            The stored session with id populated.
        """
        ...

    async def touch_if_active(self, session_token: str, *, now: datetime) -> int | None:
        """Set last_used_at=now on an unexpired session.

        Args:
            session_token: Bearer token.
            now: Current instant, also the expiry cutoff.

        Returns:
            The owning user_id, or None if the token is unknown or expired.
        """
        ...

    async def find_by_token(self, session_token: str) -> SessionData | None:
        """Find a session by token regardless of expiry."""
        ...

    async def delete_by_token(self, session_token: str) -> bool:
        """Delete one session.

        Returns:
            True if a row was deleted.
        """
        ...

    async def delete_all_for_user(self, user_id: int) -> int:
        """Delete every session of a user.

        Returns:
            Number of sessions deleted.
        """
        ...

    async def delete_expired(self, *, before: datetime) -> int:
        """Delete sessions whose expires_at is before `before`."""
        ...
