"""Fixtures for application unit tests (no database)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import StorageError
from ghmcp.core.result import Failure, Success


class StubUnitOfWork:
    """Runs work against mock repositories and records operation names."""

    def __init__(self, repos: MagicMock) -> None:
        self.repos = repos
        self.operations: list[str] = []

    async def run(self, operation, work):
        self.operations.append(operation)
        return Success(value=await work(self.repos))


class FailingUnitOfWork:
    """Every call fails as if the store were down."""

    def __init__(self) -> None:
        self.operations: list[str] = []

    async def run(self, operation, work):
        self.operations.append(operation)
        return Failure(
            error=StorageError(
                code=ErrorCode.STORAGE_UNAVAILABLE,
                message=f"Storage unavailable during {operation}",
                operation=operation,
            )
        )


@pytest.fixture
def repos() -> MagicMock:
    """Mock repositories; each repository is an AsyncMock."""
    repos = MagicMock()
    repos.users = AsyncMock()
    repos.credentials = AsyncMock()
    repos.csrf_tokens = AsyncMock()
    repos.sessions = AsyncMock()
    repos.rate_limits = AsyncMock()
    repos.workflow_states = AsyncMock()
    return repos


@pytest.fixture
def stub_uow(repos) -> StubUnitOfWork:
    return StubUnitOfWork(repos)


@pytest.fixture
def failing_uow() -> FailingUnitOfWork:
    return FailingUnitOfWork()
