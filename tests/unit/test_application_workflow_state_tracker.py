"""Unit tests for WorkflowStateTracker."""

import pytest

from ghmcp.application.services import WorkflowStateTracker
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import ConflictError, NotFoundError, ValidationError
from ghmcp.core.result import Success
from ghmcp.domain.enums import WorkflowType
from ghmcp.domain.protocols import WorkflowStateData

KEY = {"repository": "octo/hello-world", "branch": "feature/login", "workflow_type": "push"}


@pytest.fixture
def tracker(stub_uow, mock_logger, clock) -> WorkflowStateTracker:
    return WorkflowStateTracker(stub_uow, mock_logger, clock=clock)


def _stored(version: int = 1, **state) -> WorkflowStateData:
    return WorkflowStateData(user_id=42, state=state, version=version, **KEY)


@pytest.mark.unit
class TestGetState:
    """Test reads."""

    async def test_returns_stored_state(self, tracker, repos):
        repos.workflow_states.find.return_value = _stored(status="in_progress")

        result = await tracker.get_state(42, **KEY)

        assert isinstance(result, Success)
        assert result.value.state == {"status": "in_progress"}
        repos.workflow_states.find.assert_awaited_once_with(user_id=42, **KEY)

    async def test_accepts_enum_workflow_type(self, tracker, repos):
        repos.workflow_states.find.return_value = _stored()

        await tracker.get_state(
            42, "octo/hello-world", "main", WorkflowType.SCAN_TASKS
        )

        assert repos.workflow_states.find.call_args.kwargs["workflow_type"] == "scan_tasks"

    async def test_missing_state(self, tracker, repos):
        repos.workflow_states.find.return_value = None

        result = await tracker.get_state(42, **KEY)

        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.WORKFLOW_STATE_NOT_FOUND

    @pytest.mark.parametrize(
        "override,code",
        [
            ({"repository": "no-slash"}, ErrorCode.INVALID_REPOSITORY),
            ({"branch": "bad branch;rm"}, ErrorCode.INVALID_BRANCH),
            ({"branch": ""}, ErrorCode.INVALID_BRANCH),
            ({"workflow_type": "deploy"}, ErrorCode.INVALID_INPUT),
        ],
    )
    async def test_invalid_key(self, tracker, repos, override, code):
        result = await tracker.get_state(42, **{**KEY, **override})

        assert isinstance(result.error, ValidationError)
        assert result.error.code == code
        repos.workflow_states.find.assert_not_called()


@pytest.mark.unit
class TestSetState:
    """Test writes."""

    async def test_unconditional_write_upserts(self, tracker, repos, clock):
        repos.workflow_states.upsert.return_value = _stored(version=3, status="done")

        result = await tracker.set_state(42, **KEY, state={"status": "done"})

        assert result.value.version == 3
        repos.workflow_states.upsert.assert_awaited_once_with(
            user_id=42, state={"status": "done"}, now=clock(), **KEY
        )
        repos.workflow_states.compare_and_set.assert_not_called()

    async def test_versioned_write_uses_compare_and_set(self, tracker, repos, clock):
        repos.workflow_states.compare_and_set.return_value = _stored(version=2)

        result = await tracker.set_state(
            42, **KEY, state={"status": "done"}, expected_version=1
        )

        assert isinstance(result, Success)
        assert repos.workflow_states.compare_and_set.call_args.kwargs[
            "expected_version"
        ] == 1

    async def test_version_mismatch_is_conflict(self, tracker, repos):
        repos.workflow_states.compare_and_set.return_value = None

        result = await tracker.set_state(
            42, **KEY, state={"status": "done"}, expected_version=1
        )

        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.WORKFLOW_STATE_CONFLICT
        assert result.error.conflicting_field == "version"

    @pytest.mark.parametrize(
        "state",
        [
            ["not", "a", "dict"],
            {"when": object()},
            {"ratio": float("nan")},
            {"files": ("a.py", "b.py")},
            {1: "integer key"},
        ],
    )
    async def test_non_json_state_rejected(self, tracker, repos, state):
        result = await tracker.set_state(42, **KEY, state=state)

        assert isinstance(result.error, ValidationError)
        assert result.error.field == "state"
        repos.workflow_states.upsert.assert_not_called()

    async def test_negative_version_rejected(self, tracker):
        result = await tracker.set_state(42, **KEY, state={}, expected_version=-1)

        assert result.error.field == "expected_version"


@pytest.mark.unit
async def test_list_states_validates_repository(tracker, repos):
    result = await tracker.list_states(42, "nope")

    assert result.error.code == ErrorCode.INVALID_REPOSITORY
    repos.workflow_states.list_for_repository.assert_not_called()
