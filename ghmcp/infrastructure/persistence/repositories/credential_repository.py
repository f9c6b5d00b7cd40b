"""CredentialRepository - SQLAlchemy implementation for github_tokens.

Upsert keyed on the unique user_id keeps at most one credential per user
no matter how many token exchanges happen.
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.domain.protocols.credential_repository import CredentialRecord
from ghmcp.infrastructure.persistence.dialect import dialect_insert
from ghmcp.infrastructure.persistence.models.github_token import GitHubToken


class CredentialRepository:
    """SQLAlchemy implementation of CredentialRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def upsert(self, record: CredentialRecord, *, now: datetime) -> None:
        """Insert or replace the credential row of record.user_id.

        Args:
            record: Encrypted credential.
            now: Timestamp for created_at (first insert) and updated_at.
        """
        stmt = dialect_insert(self._session, GitHubToken).values(
            user_id=record.user_id,
            username=record.username,
            encrypted_token=record.encrypted_token,
            encrypted_refresh_token=record.encrypted_refresh_token,
            expires_at=record.expires_at,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "username": stmt.excluded.username,
                "encrypted_token": stmt.excluded.encrypted_token,
                "encrypted_refresh_token": stmt.excluded.encrypted_refresh_token,
                "expires_at": stmt.excluded.expires_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self._session.execute(stmt)

    async def find_by_user_id(self, user_id: int) -> CredentialRecord | None:
        """Find the credential row of a user.

        Args:
            user_id: User identifier.

        Returns:
            CredentialRecord if found, None otherwise.
        """
        stmt = select(GitHubToken).where(GitHubToken.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return CredentialRecord(
            user_id=model.user_id,
            username=model.username,
            encrypted_token=model.encrypted_token,
            encrypted_refresh_token=model.encrypted_refresh_token,
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the credential row of a user.

        Returns:
            True if deleted, False if not found.
        """
        stmt = (
            delete(GitHubToken)
            .where(GitHubToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0
