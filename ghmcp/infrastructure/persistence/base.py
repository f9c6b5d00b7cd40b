"""Base model and mixins for all database entities.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Internal mixin that adds updated_at
- BaseMutableModel: Recommended base for mutable models (combines above)

Following hexagonal architecture:
- This is an infrastructure concern (database implementation detail)
- Domain DTOs are mapped to/from these models in the repositories

Usage:
    # For mutable models (can be updated)
    class UserModel(BaseMutableModel):
        __tablename__ = "users"
        username: Mapped[str]
        # Has: id, created_at, updated_at

    # For immutable models (cannot be updated)
    class AuditLog(BaseModel):
        __tablename__ = "audit_logs"
        action: Mapped[str]
        # Has: id, created_at (no updated_at)

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at via TimestampMixin)
        │   ├── User, GitHubToken, RateLimitWindow, WorkflowState
        └── AuditLog, CsrfToken, Session
"""

from datetime import datetime

from sqlalchemy import MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ghmcp.infrastructure.persistence.types import IdType, UTCDateTime

# Deterministic constraint names so Alembic autogenerate stays stable.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class BaseModel(DeclarativeBase):
    """Base class for all database models (mutable and immutable).

    Provides common fields that ALL database models need:
    - id: integer surrogate primary key (autoincrement)
    - created_at: Timestamp when record was created (UTC)

    Repositories set created_at explicitly from the injected clock; the
    server default only covers rows written outside the application.
    """

    __abstract__ = True

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    id: Mapped[int] = mapped_column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: String showing class name and ID.
        """
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Mixin for mutable models that track updates.

    Note:
        This is typically used via BaseMutableModel, not directly.
    """

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models.

    Provides:
        - id: integer primary key (from BaseModel)
        - created_at: Timestamp when created (from BaseModel)
        - updated_at: Timestamp when last updated (from TimestampMixin)

    When NOT to use:
        For append-only models (audit logs), use BaseModel directly.
    """

    __abstract__ = True
