"""Column types shared by all models.

UTCDateTime:
    SQLite has no timezone-aware timestamp type and hands back naive
    values. This decorator stores every instant as UTC and always returns
    aware UTC datetimes, so comparisons like `expires_at <= now` behave the
    same on SQLite and PostgreSQL.

IdType:
    BIGINT on PostgreSQL, plain INTEGER on SQLite (only INTEGER PRIMARY KEY
    autoincrements there).

JsonDocument:
    JSON everywhere, JSONB on PostgreSQL.
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, BigInteger, DateTime, Integer
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

IdType = BigInteger().with_variant(Integer(), "sqlite")

JsonDocument = JSON().with_variant(JSONB(), "postgresql")


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware UTC timestamp on every backend."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        value = value.astimezone(UTC)
        if dialect.name == "sqlite":
            # Stored as text; one fixed format keeps string comparison correct.
            return value.replace(tzinfo=None)
        return value

    def process_result_value(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
