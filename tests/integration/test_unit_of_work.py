"""Integration tests for SqlUnitOfWork."""

import pytest
from sqlalchemy import func, select

from ghmcp.core.errors import StorageError
from ghmcp.core.result import Failure, Success
from ghmcp.domain.protocols import SessionData
from ghmcp.infrastructure.persistence.models import CsrfToken


@pytest.mark.integration
class TestSqlUnitOfWork:
    """Commit, rollback and error mapping."""

    async def test_commits_on_success(self, uow, clock, test_database):
        async def work(repos):
            await repos.csrf_tokens.add("abc", expires_at=clock(), now=clock())
            return "done"

        assert await uow.run("test.commit", work) == Success(value="done")
        async with test_database.get_session() as session:
            assert await session.scalar(select(func.count()).select_from(CsrfToken)) == 1

    async def test_rolls_back_on_storage_failure(
        self, uow, clock, test_database, mock_logger
    ):
        async def work(repos):
            await repos.csrf_tokens.add("abc", expires_at=clock(), now=clock())
            await repos.sessions.add(
                SessionData(
                    session_token="t",
                    user_id=999,
                    expires_at=clock(),
                    last_used_at=clock(),
                )
            )

        result = await uow.run("test.rollback", work)

        assert isinstance(result, Failure)
        assert isinstance(result.error, StorageError)
        assert result.error.operation == "test.rollback"
        assert result.error.details["error_type"] == "IntegrityError"
        async with test_database.get_session() as session:
            assert await session.scalar(select(func.count()).select_from(CsrfToken)) == 0
        assert mock_logger.warning.call_args.args[0] == "storage_operation_failed"

    async def test_programming_errors_propagate(self, uow):
        async def work(repos):
            raise KeyError("bug")

        with pytest.raises(KeyError):
            await uow.run("test.bug", work)
