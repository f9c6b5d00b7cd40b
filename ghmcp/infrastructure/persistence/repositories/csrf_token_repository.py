"""CsrfTokenRepository - SQLAlchemy implementation for csrf_tokens."""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.infrastructure.persistence.models.csrf_token import CsrfToken


class CsrfTokenRepository:
    """SQLAlchemy implementation of CsrfTokenRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, token: str, *, expires_at: datetime, now: datetime) -> None:
        """Store a freshly issued token."""
        self._session.add(CsrfToken(token=token, expires_at=expires_at, created_at=now))
        await self._session.flush()

    async def consume(self, token: str) -> datetime | None:
        """Delete a token and report its expiry.

        `DELETE ... RETURNING` in one statement: of two concurrent
        consumers exactly one gets the row back.
        """
        stmt = (
            delete(CsrfToken)
            .where(CsrfToken.token == token)
            .returning(CsrfToken.expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_expired(self, *, before: datetime) -> int:
        """Delete tokens with expires_at at or before `before`."""
        stmt = (
            delete(CsrfToken)
            .where(CsrfToken.expires_at <= before)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0
