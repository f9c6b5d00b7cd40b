"""Integration tests for RateLimiter against SQLite.

Tests cover:
- push allows 3 per minute, the 4th is rejected with Retry-After
- Counters are per address and per endpoint
- A new window starts from zero
- Concurrent requests are each counted exactly once
"""

import asyncio
from datetime import UTC, datetime

import pytest

from ghmcp.core.result import Failure, Success
from ghmcp.domain.errors import RateLimitedError
from tests.conftest import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, 15, tzinfo=UTC))


@pytest.mark.integration
class TestFixedWindow:
    """Fixed-window behavior over a real store."""

    async def test_push_allows_three_per_minute(self, services):
        # Act
        results = [
            await services.rate_limiter.check_and_increment("203.0.113.7", "push")
            for _ in range(4)
        ]

        # Assert
        assert [r.value.remaining for r in results[:3]] == [2, 1, 0]
        rejected = results[3]
        assert isinstance(rejected, Failure)
        assert isinstance(rejected.error, RateLimitedError)
        assert rejected.error.retry_after == 45

    async def test_new_window_resets_count(self, services, clock):
        for _ in range(4):
            await services.rate_limiter.check_and_increment("203.0.113.7", "push")

        clock.advance(seconds=45)
        result = await services.rate_limiter.check_and_increment("203.0.113.7", "push")

        assert isinstance(result, Success)
        assert result.value.remaining == 2
        assert result.value.reset_seconds == 60

    async def test_counters_are_per_address_and_endpoint(self, services):
        for _ in range(3):
            await services.rate_limiter.check_and_increment("203.0.113.7", "push")

        other_address = await services.rate_limiter.check_and_increment(
            "198.51.100.1", "push"
        )
        other_endpoint = await services.rate_limiter.check_and_increment(
            "203.0.113.7", "merge"
        )

        assert other_address.value.remaining == 2
        assert other_endpoint.value.remaining == 2

    async def test_reset_clears_window(self, services):
        for _ in range(3):
            await services.rate_limiter.check_and_increment("203.0.113.7", "push")

        assert await services.rate_limiter.reset("203.0.113.7", "push") == Success(
            value=True
        )
        result = await services.rate_limiter.check_and_increment("203.0.113.7", "push")

        assert result.value.remaining == 2

    async def test_concurrent_requests_counted_once_each(self, services):
        # Act
        results = await asyncio.gather(
            *(
                services.rate_limiter.check_and_increment("203.0.113.7", "scan_tasks")
                for _ in range(25)
            )
        )

        # Assert
        allowed = [r for r in results if isinstance(r, Success)]
        rejected = [r for r in results if isinstance(r, Failure)]
        assert len(allowed) == 10
        assert len(rejected) == 15
        assert all(isinstance(r.error, RateLimitedError) for r in rejected)
        assert sorted(r.value.remaining for r in allowed) == list(range(10))
