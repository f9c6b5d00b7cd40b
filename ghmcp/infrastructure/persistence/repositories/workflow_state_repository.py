"""WorkflowStateRepository - SQLAlchemy implementation for workflow_states.

Writes are single statements:
    - upsert(): INSERT ... ON CONFLICT DO UPDATE, version + 1
    - compare_and_set(): UPDATE ... WHERE version = expected, version + 1
      (or INSERT ... ON CONFLICT DO NOTHING when creating)
"""

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.domain.protocols.workflow_state_repository import WorkflowStateData
from ghmcp.domain.types import Document
from ghmcp.infrastructure.persistence.dialect import dialect_insert
from ghmcp.infrastructure.persistence.models.workflow_state import WorkflowState

_KEY_COLUMNS = ["user_id", "repository", "branch", "workflow_type"]


class WorkflowStateRepository:
    """SQLAlchemy implementation of WorkflowStateRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def find(
        self, *, user_id: int, repository: str, branch: str, workflow_type: str
    ) -> WorkflowStateData | None:
        """Find the state stored for one key."""
        stmt = select(WorkflowState).where(
            WorkflowState.user_id == user_id,
            WorkflowState.repository == repository,
            WorkflowState.branch == branch,
            WorkflowState.workflow_type == workflow_type,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_dto(model)

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
        """Insert or replace a state (last writer wins)."""
        stmt = self._insert(
            user_id=user_id,
            repository=repository,
            branch=branch,
            workflow_type=workflow_type,
            state=state,
            now=now,
        )
        stmt = (
            stmt.on_conflict_do_update(
                index_elements=_KEY_COLUMNS,
                set_={
                    "state": stmt.excluded.state,
                    "version": WorkflowState.version + 1,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            .returning(WorkflowState)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return self._to_dto(result.scalar_one())

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
        """Write only if the stored version equals expected_version.

        expected_version=0 means the key must not exist yet.

        Returns:
            Stored state, or None on a version mismatch.
        """
        if expected_version == 0:
            stmt = (
                self._insert(
                    user_id=user_id,
                    repository=repository,
                    branch=branch,
                    workflow_type=workflow_type,
                    state=state,
                    now=now,
                )
                .on_conflict_do_nothing(index_elements=_KEY_COLUMNS)
                .returning(WorkflowState)
                .execution_options(populate_existing=True)
            )
        else:
            stmt = (
                update(WorkflowState)
                .where(
                    WorkflowState.user_id == user_id,
                    WorkflowState.repository == repository,
                    WorkflowState.branch == branch,
                    WorkflowState.workflow_type == workflow_type,
                    WorkflowState.version == expected_version,
                )
                .values(
                    state=state,
                    version=WorkflowState.version + 1,
                    updated_at=now,
                )
                .returning(WorkflowState)
                .execution_options(
                    synchronize_session=False, populate_existing=True
                )
            )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_dto(model)

    async def list_for_repository(
        self, *, user_id: int, repository: str
    ) -> list[WorkflowStateData]:
        """All states of a user for one repository, most recently updated first."""
        stmt = (
            select(WorkflowState)
            .where(
                WorkflowState.user_id == user_id,
                WorkflowState.repository == repository,
            )
            .order_by(WorkflowState.updated_at.desc(), WorkflowState.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_dto(model) for model in result.scalars().all()]

    def _insert(
        self,
        *,
        user_id: int,
        repository: str,
        branch: str,
        workflow_type: str,
        state: Document,
        now: datetime,
    ) -> Any:
        return dialect_insert(self._session, WorkflowState).values(
            user_id=user_id,
            repository=repository,
            branch=branch,
            workflow_type=workflow_type,
            state=state,
            version=1,
            created_at=now,
            updated_at=now,
        )

    def _to_dto(self, model: WorkflowState) -> WorkflowStateData:
        return WorkflowStateData(
            user_id=model.user_id,
            repository=model.repository,
            branch=model.branch,
            workflow_type=model.workflow_type,
            state=model.state,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
