"""RateLimitRepository - fixed-window counters in rate_limits.

The increment is one `INSERT ... ON CONFLICT DO UPDATE SET request_count =
request_count + 1 RETURNING request_count`. The database serializes
conflicting upserts on the unique key, so concurrent requests never see
the same pre-increment count.
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ghmcp.infrastructure.persistence.dialect import dialect_insert
from ghmcp.infrastructure.persistence.models.rate_limit_window import (
    RateLimitWindow,
)


class RateLimitRepository:
    """SQLAlchemy implementation of RateLimitRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def increment(
        self,
        *,
        ip_address: str,
        endpoint: str,
        window_start: datetime,
        now: datetime,
    ) -> int:
        """Add one request to a window and return the new count."""
        stmt = dialect_insert(self._session, RateLimitWindow).values(
            ip_address=ip_address,
            endpoint=endpoint,
            window_start=window_start,
            request_count=1,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["ip_address", "endpoint", "window_start"],
            set_={
                "request_count": RateLimitWindow.request_count + 1,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(RateLimitWindow.request_count)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete_window(
        self, *, ip_address: str, endpoint: str, window_start: datetime
    ) -> bool:
        """Delete one window's counter."""
        stmt = (
            delete(RateLimitWindow)
            .where(
                RateLimitWindow.ip_address == ip_address,
                RateLimitWindow.endpoint == endpoint,
                RateLimitWindow.window_start == window_start,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def delete_windows_before(self, cutoff: datetime) -> int:
        """Delete counters of windows that started before `cutoff`."""
        stmt = (
            delete(RateLimitWindow)
            .where(RateLimitWindow.window_start < cutoff)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0
