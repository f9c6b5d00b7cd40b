"""Workflow command flows and their conventional lifecycle.

WorkflowType is the closed set of command flows whose state is tracked.
WorkflowStatus names the conventional START -> IN_PROGRESS -> DONE|FAILED
lifecycle; callers store it inside their state document if they want it.
The tracker never enforces transitions.
"""

from enum import Enum


class WorkflowType(str, Enum):
    """Command flows with persisted per-branch state."""

    PUSH = "push"
    SCAN_TASKS = "scan_tasks"
    MERGE = "merge"


class WorkflowStatus(str, Enum):
    """Conventional lifecycle of a workflow run."""

    START = "start"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further updates are expected."""
        return self in (WorkflowStatus.DONE, WorkflowStatus.FAILED)
