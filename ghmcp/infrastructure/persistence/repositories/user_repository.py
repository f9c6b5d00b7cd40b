"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain UserData DTOs and database User models.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.domain.protocols.user_repository import UserData
from ghmcp.infrastructure.persistence.dialect import dialect_insert
from ghmcp.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from the protocol (structural typing).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

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
        """Insert on first login, refresh display fields afterwards.

        Single `INSERT ... ON CONFLICT (github_id) DO UPDATE ... RETURNING`,
        so two concurrent first logins still converge on one row.
        """
        stmt = dialect_insert(self._session, UserModel).values(
            github_id=github_id,
            username=username,
            name=name,
            email=email,
            avatar_url=avatar_url,
            created_at=now,
            updated_at=now,
        )
        stmt = (
            stmt.on_conflict_do_update(
                index_elements=["github_id"],
                set_={
                    "username": stmt.excluded.username,
                    "name": stmt.excluded.name,
                    "email": stmt.excluded.email,
                    "avatar_url": stmt.excluded.avatar_url,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            .returning(UserModel)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return self._to_dto(result.scalar_one())

    async def find_by_id(self, user_id: int) -> UserData | None:
        """Find user by surrogate id."""
        user_model = await self._session.get(UserModel, user_id)
        if user_model is None:
            return None
        return self._to_dto(user_model)

    def _to_dto(self, model: UserModel) -> UserData:
        return UserData(
            id=model.id,
            github_id=model.github_id,
            username=model.username,
            name=model.name,
            email=model.email,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
