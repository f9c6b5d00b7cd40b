"""Unit of work protocol.

Application services never see a database session. They hand a unit of
work an async callable that receives the repositories; the whole callable
runs in one transaction and any store failure (connection error,
constraint violation, timeout) comes back as Failure(StorageError).

Usage:
    async def _work(repos: Repositories) -> int:
        return await repos.rate_limits.increment(...)

    result = await uow.run("rate_limit.increment", _work)
    match result:
        case Success(value=count): ...
        case Failure(error=error): ...
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from ghmcp.core.errors import StorageError
from ghmcp.core.result import Result
from ghmcp.domain.protocols.credential_repository import CredentialRepository
from ghmcp.domain.protocols.csrf_token_repository import CsrfTokenRepository
from ghmcp.domain.protocols.rate_limit_repository import RateLimitRepository
from ghmcp.domain.protocols.session_repository import SessionRepository
from ghmcp.domain.protocols.user_repository import UserRepository
from ghmcp.domain.protocols.workflow_state_repository import (
    WorkflowStateRepository,
)

T = TypeVar("T")


class Repositories(Protocol):
    """Repositories bound to one transaction."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def credentials(self) -> CredentialRepository: ...

    @property
    def csrf_tokens(self) -> CsrfTokenRepository: ...

    @property
    def sessions(self) -> SessionRepository: ...

    @property
    def rate_limits(self) -> RateLimitRepository: ...

    @property
    def workflow_states(self) -> WorkflowStateRepository: ...


class UnitOfWorkProtocol(Protocol):
    """Runs work against the repositories inside one transaction."""

    async def run(
        self,
        operation: str,
        work: Callable[[Repositories], Awaitable[T]],
    ) -> Result[T, StorageError]:
        """Run `work` in a transaction, committing on success.

        Args:
            operation: Name used in logs and in StorageError.operation.
            work: Async callable doing the reads and writes.

        Returns:
            Success(work's return value) after commit, or
            Failure(StorageError) if the store failed or timed out.
            Nothing is committed on failure.
        """
        ...
