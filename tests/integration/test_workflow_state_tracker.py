"""Integration tests for WorkflowStateTracker against SQLite."""

import asyncio

import pytest
import pytest_asyncio

from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import ConflictError, NotFoundError
from ghmcp.core.result import Failure, Success
from ghmcp.domain.enums import WorkflowStatus, WorkflowType


@pytest_asyncio.fixture
async def user_id(create_user) -> int:
    return await create_user(id=42)


@pytest.mark.integration
class TestWorkflowState:
    """Per-branch state documents with versions."""

    async def test_round_trip(self, services, user_id, clock):
        state = {"status": "in_progress", "files": ["a.py", "b.py"], "nested": {"n": 1}}

        stored = await services.workflow_states.set_state(
            user_id, "octo/hello-world", "feature/x", WorkflowType.PUSH, state
        )
        loaded = await services.workflow_states.get_state(
            user_id, "octo/hello-world", "feature/x", "push"
        )

        assert stored.value.version == 1
        assert loaded.value.state == state
        assert loaded.value.updated_at == clock()

    async def test_missing(self, services, user_id):
        result = await services.workflow_states.get_state(
            user_id, "octo/hello-world", "main", "merge"
        )

        assert isinstance(result.error, NotFoundError)

    async def test_keys_are_independent(self, services, user_id):
        await services.workflow_states.set_state(
            user_id, "octo/hello-world", "main", "push", {"n": 1}
        )
        await services.workflow_states.set_state(
            user_id, "octo/hello-world", "main", "merge", {"n": 2}
        )
        await services.workflow_states.set_state(
            user_id, "octo/hello-world", "dev", "push", {"n": 3}
        )

        listed = (
            await services.workflow_states.list_states(user_id, "octo/hello-world")
        ).value

        assert sorted(s.state["n"] for s in listed) == [1, 2, 3]

    async def test_unconditional_write_bumps_version(self, services, user_id, clock):
        key = (user_id, "octo/hello-world", "main", "push")
        await services.workflow_states.set_state(*key, {"status": "start"})
        clock.advance(minutes=1)

        second = await services.workflow_states.set_state(*key, {"status": "done"})

        assert second.value.version == 2
        assert second.value.state == {"status": "done"}
        assert second.value.updated_at == clock()

    async def test_compare_and_set(self, services, user_id):
        key = (user_id, "octo/hello-world", "main", "scan_tasks")
        created = await services.workflow_states.set_state(
            *key, {"step": 1}, expected_version=0
        )

        updated = await services.workflow_states.set_state(
            *key, {"step": 2}, expected_version=created.value.version
        )
        stale = await services.workflow_states.set_state(
            *key, {"step": 3}, expected_version=created.value.version
        )

        assert updated.value.version == 2
        assert isinstance(stale.error, ConflictError)
        assert stale.error.code == ErrorCode.WORKFLOW_STATE_CONFLICT
        current = await services.workflow_states.get_state(*key)
        assert current.value.state == {"step": 2}

    async def test_create_only_if_absent(self, services, user_id):
        key = (user_id, "octo/hello-world", "main", "push")
        await services.workflow_states.set_state(*key, {"step": 1})

        result = await services.workflow_states.set_state(
            *key, {"step": 9}, expected_version=0
        )

        assert isinstance(result.error, ConflictError)

    async def test_concurrent_versioned_writers_one_wins(self, services, user_id):
        key = (user_id, "octo/hello-world", "main", "push")
        base = (await services.workflow_states.set_state(*key, {"n": 0})).value

        results = await asyncio.gather(
            *(
                services.workflow_states.set_state(
                    *key, {"n": i}, expected_version=base.version
                )
                for i in range(1, 6)
            )
        )

        assert sum(isinstance(r, Success) for r in results) == 1
        assert all(
            isinstance(r.error, ConflictError)
            for r in results
            if isinstance(r, Failure)
        )

    async def test_status_lifecycle(self, services, user_id):
        # Arrange
        key = (user_id, "octo/hello-world", "feature/x", WorkflowType.MERGE)
        version = 0
        seen = []

        # Act
        for status in (
            WorkflowStatus.START,
            WorkflowStatus.IN_PROGRESS,
            WorkflowStatus.DONE,
        ):
            result = await services.workflow_states.set_state(
                *key, {"status": status.value}, expected_version=version
            )
            version = result.value.version
            seen.append(version)

        # Assert
        assert seen == [1, 2, 3]
        final = (await services.workflow_states.get_state(*key)).value
        status = WorkflowStatus(final.state["status"])
        assert status is WorkflowStatus.DONE
        assert status.is_terminal
        assert not WorkflowStatus.IN_PROGRESS.is_terminal

    async def test_tuple_state_rejected(self, services, user_id):
        key = (user_id, "octo/hello-world", "main", "push")

        result = await services.workflow_states.set_state(
            *key, {"files": ("a.py", "b.py")}
        )

        assert result.error.field == "state"
        missing = await services.workflow_states.get_state(*key)
        assert isinstance(missing.error, NotFoundError)
