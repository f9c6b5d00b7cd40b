"""Workflow state database model.

One JSON document per (user, repository, branch, workflow type). The
version column is bumped on every write and backs compare-and-set.
"""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.domain.types import Document
from ghmcp.infrastructure.persistence.base import BaseMutableModel
from ghmcp.infrastructure.persistence.types import IdType, JsonDocument


class WorkflowState(BaseMutableModel):
    """Persisted state of a push, scan_tasks or merge flow.

    Fields:
        user_id: Owning user (cascade delete)
        repository: "owner/name"
        branch: Branch name
        workflow_type: push, scan_tasks or merge
        state: JSON document
        version: Write counter, starts at 1
    """

    __tablename__ = "workflow_states"

    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    repository: Mapped[str] = mapped_column(String(140), nullable=False)

    branch: Mapped[str] = mapped_column(String(255), nullable=False)

    workflow_type: Mapped[str] = mapped_column(String(20), nullable=False)

    state: Mapped[Document] = mapped_column(JsonDocument, nullable=False)

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "repository", "branch", "workflow_type"),
        Index("ix_workflow_states_user_id_repository", "user_id", "repository"),
    )
