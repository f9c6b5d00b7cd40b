"""Time source shared by services.

Services take a `clock` callable instead of calling datetime.now()
directly, so tests can move time forward without sleeping.

Usage:
    from ghmcp.core.clock import Clock, utc_now

    class SessionManager:
        def __init__(self, ..., clock: Clock = utc_now) -> None: ...
"""

from collections.abc import Callable
from datetime import UTC, datetime

type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current instant, timezone-aware UTC."""
    return datetime.now(UTC)
