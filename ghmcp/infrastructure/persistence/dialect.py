"""Dialect-specific INSERT for upserts.

`INSERT ... ON CONFLICT` is spelled the same on PostgreSQL and SQLite but
lives in each dialect's own insert() construct. Repositories ask for the
one matching the session's bind.
"""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, model: type[Any]) -> Any:
    """Return an upsert-capable insert() for the session's backend.

    Args:
        session: Session whose bind decides the dialect.
        model: Mapped class to insert into.

    Raises:
        NotImplementedError: For backends without ON CONFLICT support.
    """
    dialect_name = session.get_bind().dialect.name
    if dialect_name == "postgresql":
        return postgresql.insert(model)
    if dialect_name == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upsert is not supported on {dialect_name}")
