"""CSRF token repository protocol for persistence abstraction."""

from datetime import datetime
from typing import Protocol


class CsrfTokenRepository(Protocol):
    """CSRF token repository protocol (port) for persistence.

    Tokens are single use: consume() deletes the row and reports what
    it deleted in the same statement, so two concurrent callbacks can
    never both see the token.
    """

    async def add(self, token: str, *, expires_at: datetime, now: datetime) -> None:
        """Store a freshly issued token."""
        ...

    async def consume(self, token: str) -> datetime | None:
        """Delete a token.

        Returns:
            The deleted token's expires_at, or None if no such token existed.
        """
        ...

    async def delete_expired(self, *, before: datetime) -> int:
        """Delete tokens that expired before `before`.

        Returns:
            Number of tokens deleted.
        """
        ...
