"""Workflow state repository protocol.

One JSON state document per (user, repository, branch, workflow type).
Each write bumps `version`; compare_and_set() only writes when the
stored version matches what the caller last read.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ghmcp.domain.types import Document


@dataclass(slots=True, kw_only=True)
class WorkflowStateData:
    """Stored workflow state.

    Attributes:
        user_id: Owning user.
        repository: "owner/name".
        branch: Branch name.
        workflow_type: push, scan_tasks or merge.
        state: Opaque JSON document.
        version: Incremented on every write, starting at 1.
        created_at: First write.
        updated_at: Last write.
    """

    user_id: int
    repository: str
    branch: str
    workflow_type: str
    state: Document
    version: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WorkflowStateRepository(Protocol):
    """Workflow state repository protocol (port)."""

    async def find(
        self, *, user_id: int, repository: str, branch: str, workflow_type: str
    ) -> WorkflowStateData | None:
        """Find the state for one key."""
        ...

    async def upsert(
        self,
        *,
        user_id: int,
        repository: str,
        branch: str,
        workflow_type: str,
        state: Document,
        now: datetime,
    ) -> WorkflowStateData:
        """Insert or replace the state unconditionally (last writer wins).

        Returns:
            The stored state, with its new version.
        """
        ...

    async def compare_and_set(
        self,
        *,
        user_id: int,
        repository: str,
        branch: str,
        workflow_type: str,
        state: Document,
        expected_version: int,
        now: datetime,
    ) -> WorkflowStateData | None:
        """Replace the state only if the stored version equals expected_version.

        An expected_version of 0 means "create only if absent".

        Returns:
            The stored state, or None if the version did not match.
        """
        ...

    async def list_for_repository(
        self, *, user_id: int, repository: str
    ) -> list[WorkflowStateData]:
        """All states of a user for one repository, newest first."""
        ...
