"""SQLAlchemy implementation of UnitOfWorkProtocol.

Each run() opens one transaction on the shared Database, hands the work
a set of repositories bound to that transaction, commits on success and
rolls back on any failure. Storage failures and timeouts come back as
Failure(StorageError); programming errors propagate.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.core.errors import StorageError
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.protocols import LoggerProtocol, Repositories
from ghmcp.infrastructure.persistence.database import Database
from ghmcp.infrastructure.persistence.errors import (
    STORAGE_EXCEPTIONS,
    storage_error_from,
)
from ghmcp.infrastructure.persistence.repositories import (
    CredentialRepository,
    CsrfTokenRepository,
    RateLimitRepository,
    SessionRepository,
    UserRepository,
    WorkflowStateRepository,
)

T = TypeVar("T")


class SqlRepositories:
    """Repositories sharing one AsyncSession (one transaction)."""

    def __init__(self, session: AsyncSession) -> None:
        self.users = UserRepository(session)
        self.credentials = CredentialRepository(session)
        self.csrf_tokens = CsrfTokenRepository(session)
        self.sessions = SessionRepository(session)
        self.rate_limits = RateLimitRepository(session)
        self.workflow_states = WorkflowStateRepository(session)


class SqlUnitOfWork:
    """Transaction runner over the shared Database.

    Attributes:
        database: Shared Database.
        timeout: Seconds before an operation is abandoned (rolled back).
    """

    def __init__(
        self,
        database: Database,
        logger: LoggerProtocol,
        *,
        timeout: float = 30.0,
    ) -> None:
        self.database = database
        self.timeout = timeout
        self._logger = logger

    async def run(
        self,
        operation: str,
        work: Callable[[Repositories], Awaitable[T]],
    ) -> Result[T, StorageError]:
        """Run work in one transaction; see UnitOfWorkProtocol.run."""
        try:
            async with asyncio.timeout(self.timeout):
                async with self.database.transaction() as session:
                    value = await work(SqlRepositories(session))
        except STORAGE_EXCEPTIONS as e:
            error = storage_error_from(e, operation=operation)
            self._logger.warning(
                "storage_operation_failed",
                operation=operation,
                infrastructure_code=(error.details or {}).get("infrastructure_code"),
                error_type=type(e).__name__,
            )
            return Failure(error=error)
        return Success(value=value)
