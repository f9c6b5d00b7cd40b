"""Database connection and session management.

This module provides database connection management using SQLAlchemy's
async engine and session handling. One Database instance is the shared
transactional store behind every component.

Following hexagonal architecture:
- This is an infrastructure concern
- Provides database sessions to repository implementations
- Handles transaction boundaries and connection pooling

Backends:
    - SQLite (aiosqlite) for development and tests. Foreign keys are
      switched on per connection so ON DELETE CASCADE / SET NULL apply.
    - PostgreSQL (asyncpg) in production, with a connection pool.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Database connection and session management.

    Usage:
        db = Database("sqlite+aiosqlite:///./data/github-mcp-server.db")
        async with db.transaction() as session:
            # Use session for database operations
            # Commits on success, rolls back on error
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
        command_timeout: float = 30.0,
    ) -> None:
        """Initialize database with connection parameters.

        Args:
            database_url: Database connection URL.
            echo: If True, log all SQL statements (useful for debugging).
            pool_size: Connections kept in the pool (PostgreSQL only).
            max_overflow: Extra connections above pool_size (PostgreSQL only).
            command_timeout: Driver-level statement timeout in seconds.
        """
        url = make_url(database_url)
        self.is_sqlite = url.get_backend_name() == "sqlite"

        if self.is_sqlite:
            self.engine: AsyncEngine = create_async_engine(
                url,
                echo=echo,
                connect_args={"timeout": command_timeout},
            )
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )
        else:
            self.engine = create_async_engine(
                url,
                echo=echo,
                pool_pre_ping=True,  # Verify connections before use
                pool_size=pool_size,
                max_overflow=max_overflow,
                connect_args={
                    "server_settings": {"jit": "off"},
                    "command_timeout": command_timeout,
                    "timeout": command_timeout,
                },
            )

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Don't expire objects after commit
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional database session.

        Commits on successful exit, rolls back on exception and always
        closes the session.

        Yields:
            AsyncSession: Database session for operations
        """
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except BaseException:
                await session.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an explicit transaction context.

        Use this when several repositories must commit together.

        Yields:
            AsyncSession: Database session within a transaction
        """
        async with self.async_session() as session:
            async with session.begin():
                yield session

    async def create_all(self) -> None:
        """Create all tables defined in the models.

        Warning: development and tests only. Production uses Alembic.
        """
        from ghmcp.infrastructure.persistence import models  # noqa: F401
        from ghmcp.infrastructure.persistence.base import BaseModel

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def close(self) -> None:
        """Close all database connections."""
        await self.engine.dispose()
