"""Shared pytest fixtures.

This configuration provides:
1. A fresh SQLite database per test (file in tmp_path, all tables created)
2. A controllable clock, so expiry tests never sleep
3. A mock logger implementing LoggerProtocol
4. Factories for users and wired services
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from ghmcp.application.services import AuditLogger
from ghmcp.infrastructure.audit import DatabaseAuditAdapter
from ghmcp.infrastructure.persistence import Database, SqlUnitOfWork
from ghmcp.infrastructure.persistence.models import User
from ghmcp.infrastructure.security import EncryptionService

TEST_ENCRYPTION_KEY = b"0123456789abcdef0123456789abcdef"


class FakeClock:
    """Callable clock that only moves when told to.

    Usage:
        clock = FakeClock()
        service = SessionManager(uow, logger, clock=clock)
        clock.advance(minutes=11)
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at 2024-01-01 12:00:00 UTC."""
    return FakeClock()


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger mock; bind() returns the same mock so calls stay observable."""
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def encryption() -> EncryptionService:
    """AES-256-GCM service with a fixed test key."""
    return EncryptionService.create(TEST_ENCRYPTION_KEY).value  # type: ignore[union-attr]


@pytest_asyncio.fixture
async def test_database(tmp_path) -> AsyncIterator[Database]:
    """Fresh SQLite database with every table created.

    A file (not :memory:) so concurrent connections share one store.
    """
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.create_all()
    yield database
    await database.close()


@pytest.fixture
def uow(test_database, mock_logger) -> SqlUnitOfWork:
    """Unit of work over the test database."""
    return SqlUnitOfWork(test_database, mock_logger, timeout=10.0)


@pytest.fixture
def audit_logger(test_database, mock_logger, clock) -> AuditLogger:
    """Audit logger writing to the test database."""
    return AuditLogger(DatabaseAuditAdapter(test_database), mock_logger, clock=clock)


@pytest.fixture
def create_user(test_database):
    """Factory inserting a user row directly.

    Usage:
        user_id = await create_user(id=42)
    """
    counter = iter(range(1000, 100000))

    async def _create(
        id: int | None = None,
        github_id: int | None = None,
        username: str = "octocat",
    ) -> int:
        async with test_database.get_session() as session:
            user = User(
                id=id,
                github_id=github_id or next(counter),
                username=username,
            )
            session.add(user)
            await session.flush()
            return user.id

    return _create
