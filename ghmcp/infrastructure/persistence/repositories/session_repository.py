"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between domain SessionData DTOs and database Session models.

This repository handles all session persistence operations including:
- Creation
- Validation touch (conditional on expiry, single statement)
- Logout and logout-everywhere
- Expired session cleanup (maintenance)
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.domain.protocols.session_repository import SessionData
from ghmcp.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This is an adapter that implements the SessionRepository port.
    It handles mapping between SessionData DTOs and Session database models.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.transaction() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     user_id = await repo.touch_if_active(token, now=now)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def add(self, session_data: SessionData) -> SessionData:
        """Insert a new session.

        Args:
            session_data: Session data to persist.

        Returns:
            The stored session with id populated.
        """
        session_model = SessionModel(
            user_id=session_data.user_id,
            session_token=session_data.session_token,
            expires_at=session_data.expires_at,
            last_used_at=session_data.last_used_at,
            ip_address=session_data.ip_address,
            user_agent=session_data.user_agent,
            created_at=session_data.created_at or session_data.last_used_at,
        )
        self._session.add(session_model)
        await self._session.flush()
        return self._to_dto(session_model)

    async def touch_if_active(self, session_token: str, *, now: datetime) -> int | None:
        """Mark an unexpired session as used.

        The expiry check and the touch are one UPDATE, so a session that
        expired but was not purged yet can never be touched.

        Args:
            session_token: Bearer token.
            now: Current instant.

        Returns:
            Owning user_id, or None if unknown or expired.
        """
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.session_token == session_token,
                SessionModel.expires_at > now,
            )
            .values(last_used_at=now)
            .returning(SessionModel.user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_token(self, session_token: str) -> SessionData | None:
        """Find session by token, expired or not.

        Args:
            session_token: Bearer token.

        Returns:
            SessionData if found, None otherwise.
        """
        stmt = select(SessionModel).where(SessionModel.session_token == session_token)
        result = await self._session.execute(stmt)
        session_model = result.scalar_one_or_none()

        if session_model is None:
            return None

        return self._to_dto(session_model)

    async def delete_by_token(self, session_token: str) -> bool:
        """Delete a session (hard delete).

        Returns:
            True if deleted, False if not found.
        """
        stmt = (
            delete(SessionModel)
            .where(SessionModel.session_token == session_token)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def delete_all_for_user(self, user_id: int) -> int:
        """Delete all sessions for a user (hard delete).

        Returns:
            Number of sessions deleted.
        """
        stmt = (
            delete(SessionModel)
            .where(SessionModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def delete_expired(self, *, before: datetime) -> int:
        """Clean up expired sessions (batch operation).

        Called by maintenance to remove sessions with expires_at at or
        before `before`.

        Returns:
            Number of sessions cleaned up.
        """
        stmt = (
            delete(SessionModel)
            .where(SessionModel.expires_at <= before)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    def _to_dto(self, session_model: SessionModel) -> SessionData:
        return SessionData(
            id=session_model.id,
            session_token=session_model.session_token,
            user_id=session_model.user_id,
            expires_at=session_model.expires_at,
            last_used_at=session_model.last_used_at,
            ip_address=session_model.ip_address,
            user_agent=session_model.user_agent,
            created_at=session_model.created_at,
        )
