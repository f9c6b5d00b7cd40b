"""Persistence layer: SQLAlchemy models, repositories and the shared Database.

Usage:
    from ghmcp.infrastructure.persistence import Database, SqlUnitOfWork
"""

from ghmcp.infrastructure.persistence.database import Database
from ghmcp.infrastructure.persistence.unit_of_work import SqlUnitOfWork

__all__ = ["Database", "SqlUnitOfWork"]
