"""Credential repository protocol for persistence abstraction.

Stores GitHub OAuth tokens in their encrypted form only. Decryption
happens in the CredentialStore, in memory, just before use.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(slots=True, kw_only=True)
class CredentialRecord:
    """Encrypted credential row (one per user).

    Attributes:
        user_id: Owning user (unique).
        username: GitHub login at the time of the token exchange.
        encrypted_token: Encrypted access token.
        encrypted_refresh_token: Encrypted refresh token, if GitHub issued one.
        expires_at: When the access token stops being usable.
        created_at: First time a token was stored for the user.
        updated_at: Last upsert.
    """

    user_id: int
    username: str
    encrypted_token: str
    encrypted_refresh_token: str | None
    expires_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Credential:
    """Decrypted credential handed to the caller.

    Never persisted or logged in this form.

    Attributes:
        user_id: Owning user.
        access_token: Plaintext GitHub access token.
        refresh_token: Plaintext refresh token, if any.
        expires_at: When the access token stops being usable.
    """

    user_id: int
    access_token: str
    refresh_token: str | None
    expires_at: datetime

    def __repr__(self) -> str:
        """Representation without token material."""
        return f"Credential(user_id={self.user_id}, expires_at={self.expires_at})"


class CredentialRepository(Protocol):
    """Credential repository protocol (port) for persistence."""

    async def upsert(self, record: CredentialRecord, *, now: datetime) -> None:
        """Insert or replace the single credential row for record.user_id.

        Args:
            record: Encrypted credential to store.
            now: Timestamp for created_at/updated_at.
        """
        ...

    async def find_by_user_id(self, user_id: int) -> CredentialRecord | None:
        """Find the credential row for a user."""
        ...

    async def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the credential row for a user.

        Returns:
            True if a row was deleted.
        """
        ...
