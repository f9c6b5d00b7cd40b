"""Rate limit counter repository protocol.

One row per (client address, endpoint, window start). The counter is
only ever changed through increment(), which is a single atomic
insert-or-increment statement.
"""

from datetime import datetime
from typing import Protocol


class RateLimitRepository(Protocol):
    """Fixed-window counter store (port)."""

    async def increment(
        self,
        *,
        ip_address: str,
        endpoint: str,
        window_start: datetime,
        now: datetime,
    ) -> int:
        """Atomically add one request to a window.

        Args:
            ip_address: Client address.
            endpoint: Logical endpoint name.
            window_start: Start of the fixed window.
            now: Timestamp for created_at on first insert.

        Returns:
            The window's request count after this request.
        """
        ...

    async def delete_window(
        self, *, ip_address: str, endpoint: str, window_start: datetime
    ) -> bool:
        """Delete one window's counter.

        Returns:
            True if a row was deleted.
        """
        ...

    async def delete_windows_before(self, cutoff: datetime) -> int:
        """Delete counters of windows that started before `cutoff`."""
        ...
