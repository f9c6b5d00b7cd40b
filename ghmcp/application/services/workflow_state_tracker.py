"""Workflow State Tracker: per-branch state for push, scan_tasks and merge.

One JSON document is kept per (user, repository, branch, workflow type).
Every write bumps an integer version. Callers that read-modify-write can
pass the version they read as `expected_version`; a concurrent writer in
between turns the second write into a ConflictError instead of silently
losing the first. Without it, the last writer wins.
"""

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.enums import WorkflowType
from ghmcp.domain.protocols import (
    LoggerProtocol,
    Repositories,
    UnitOfWorkProtocol,
    WorkflowStateData,
)
from ghmcp.domain.types import Document
from ghmcp.domain.validators import (
    validate_branch_name,
    validate_json_document,
    validate_repository,
)


class WorkflowStateTracker:
    """Reads and writes workflow state documents."""

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._logger = logger.bind(component="workflow_state_tracker")
        self._clock = clock

    async def get_state(
        self,
        user_id: int,
        repository: str,
        branch: str,
        workflow_type: WorkflowType | str,
    ) -> Result[WorkflowStateData, ValidationError | NotFoundError | StorageError]:
        """Return the stored state for one key.

        Returns:
            Success(WorkflowStateData) with document, version and timestamps.
            Failure(NotFoundError) if nothing was stored yet.
        """
        match _validate_key(repository, branch, workflow_type):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=kind):
                pass

        async def _work(repos: Repositories) -> WorkflowStateData | None:
            return await repos.workflow_states.find(
                user_id=user_id,
                repository=repository,
                branch=branch,
                workflow_type=kind.value,
            )

        match await self._uow.run("workflow_state.get", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=None):
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.WORKFLOW_STATE_NOT_FOUND,
                        message="No workflow state stored",
                        resource_type="workflow_state",
                        resource_id=f"{repository}#{branch}:{kind.value}",
                    )
                )
            case Success(value=stored):
                return Success(value=stored)

    async def set_state(
        self,
        user_id: int,
        repository: str,
        branch: str,
        workflow_type: WorkflowType | str,
        state: Document,
        expected_version: int | None = None,
    ) -> Result[
        WorkflowStateData, ValidationError | ConflictError | StorageError
    ]:
        """Store a state document.

        Args:
            user_id: Owning user.
            repository: "owner/name".
            branch: Branch name (must already be sanitized).
            workflow_type: push, scan_tasks or merge.
            state: JSON-serializable mapping.
            expected_version: Version last read; 0 means "must not exist yet".
                None writes unconditionally.

        Returns:
            Success(WorkflowStateData) as stored, with its new version.
            Failure(ConflictError) if expected_version no longer matches.
        """
        match _validate_key(repository, branch, workflow_type):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=kind):
                pass

        try:
            validate_json_document(state)
        except ValueError as e:
            return Failure(error=_invalid(ErrorCode.INVALID_INPUT, e, "state"))
        if expected_version is not None and expected_version < 0:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="expected_version must not be negative",
                    field="expected_version",
                )
            )

        now = self._clock()

        async def _work(repos: Repositories) -> WorkflowStateData | None:
            if expected_version is None:
                return await repos.workflow_states.upsert(
                    user_id=user_id,
                    repository=repository,
                    branch=branch,
                    workflow_type=kind.value,
                    state=state,
                    now=now,
                )
            return await repos.workflow_states.compare_and_set(
                user_id=user_id,
                repository=repository,
                branch=branch,
                workflow_type=kind.value,
                state=state,
                expected_version=expected_version,
                now=now,
            )

        match await self._uow.run("workflow_state.set", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=None):
                self._logger.warning(
                    "workflow_state_conflict",
                    user_id=user_id,
                    repository=repository,
                    branch=branch,
                    workflow_type=kind.value,
                    expected_version=expected_version,
                )
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.WORKFLOW_STATE_CONFLICT,
                        message="Workflow state was changed by another writer",
                        resource_type="workflow_state",
                        conflicting_field="version",
                    )
                )
            case Success(value=stored):
                self._logger.debug(
                    "workflow_state_updated",
                    user_id=user_id,
                    repository=repository,
                    branch=branch,
                    workflow_type=kind.value,
                    version=stored.version,
                )
                return Success(value=stored)

    async def list_states(
        self, user_id: int, repository: str
    ) -> Result[list[WorkflowStateData], ValidationError | StorageError]:
        """All states of a user for one repository, most recently updated first."""
        try:
            validate_repository(repository)
        except ValueError as e:
            return Failure(error=_invalid(ErrorCode.INVALID_REPOSITORY, e, "repository"))

        async def _work(repos: Repositories) -> list[WorkflowStateData]:
            return await repos.workflow_states.list_for_repository(
                user_id=user_id, repository=repository
            )

        return await self._uow.run("workflow_state.list", _work)


def _validate_key(
    repository: str, branch: str, workflow_type: WorkflowType | str
) -> Result[WorkflowType, ValidationError]:
    try:
        validate_repository(repository)
    except ValueError as e:
        return Failure(error=_invalid(ErrorCode.INVALID_REPOSITORY, e, "repository"))
    try:
        validate_branch_name(branch)
    except ValueError as e:
        return Failure(error=_invalid(ErrorCode.INVALID_BRANCH, e, "branch"))
    try:
        return Success(value=WorkflowType(workflow_type))
    except ValueError as e:
        return Failure(error=_invalid(ErrorCode.INVALID_INPUT, e, "workflow_type"))


def _invalid(code: ErrorCode, error: ValueError, field: str) -> ValidationError:
    return ValidationError(code=code, message=str(error), field=field)
