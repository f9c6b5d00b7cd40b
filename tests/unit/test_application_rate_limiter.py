"""Unit tests for RateLimiter.

Tests cover:
- Remaining count and reset seconds on allowed requests
- Rejection once the window count exceeds the limit
- Disabled rules never touch storage
- Storage failure is reported, not treated as "allowed"
"""

from datetime import UTC, datetime

import pytest

from ghmcp.application.services import RateLimiter
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import StorageError, ValidationError
from ghmcp.core.result import Failure, Success
from ghmcp.domain.errors import RateLimitedError
from ghmcp.domain.value_objects import RateLimitConfig, RateLimitResult, RateLimitRule
from tests.conftest import FakeClock

CONFIG = RateLimitConfig(
    default_rule=RateLimitRule(limit=60, window_seconds=60),
    rules={
        "push": RateLimitRule(limit=3, window_seconds=60),
        "off": RateLimitRule(limit=1, window_seconds=60, enabled=False),
    },
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, 42, tzinfo=UTC))


@pytest.fixture
def limiter(stub_uow, mock_logger, clock) -> RateLimiter:
    return RateLimiter(stub_uow, CONFIG, mock_logger, clock=clock)


@pytest.mark.unit
class TestCheckAndIncrement:
    """Test the allow/deny decision."""

    async def test_allowed_request_reports_remaining(self, limiter, repos):
        repos.rate_limits.increment.return_value = 1

        result = await limiter.check_and_increment("203.0.113.7", "push")

        assert result == Success(
            value=RateLimitResult(limit=3, remaining=2, reset_seconds=18)
        )

    async def test_increment_uses_window_start(self, limiter, repos, clock):
        repos.rate_limits.increment.return_value = 1

        await limiter.check_and_increment("203.0.113.7", "push")

        repos.rate_limits.increment.assert_awaited_once_with(
            ip_address="203.0.113.7",
            endpoint="push",
            window_start=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
            now=clock(),
        )

    async def test_last_allowed_request(self, limiter, repos):
        repos.rate_limits.increment.return_value = 3

        result = await limiter.check_and_increment("203.0.113.7", "push")

        assert result.value.remaining == 0

    async def test_request_over_limit_rejected(self, limiter, repos, mock_logger):
        repos.rate_limits.increment.return_value = 4

        result = await limiter.check_and_increment("203.0.113.7", "push")

        assert isinstance(result, Failure)
        assert isinstance(result.error, RateLimitedError)
        assert result.error.code == ErrorCode.RATE_LIMIT_EXCEEDED
        assert result.error.retry_after == 18
        assert result.error.limit == 3
        assert not result.error.code.is_authentication_failure
        mock_logger.warning.assert_called_once()

    async def test_default_rule_for_unlisted_endpoint(self, limiter, repos):
        repos.rate_limits.increment.return_value = 10

        result = await limiter.check_and_increment("203.0.113.7", "scan_tasks")

        assert result.value.limit == 60
        assert result.value.remaining == 50

    async def test_disabled_rule_skips_storage(self, limiter, repos):
        result = await limiter.check_and_increment("203.0.113.7", "off")

        assert isinstance(result, Success)
        repos.rate_limits.increment.assert_not_called()

    async def test_missing_address_rejected(self, limiter, repos):
        result = await limiter.check_and_increment("", "push")

        assert isinstance(result.error, ValidationError)
        assert result.error.field == "client_address"

    async def test_storage_failure_is_not_fail_open(self, failing_uow, mock_logger):
        limiter = RateLimiter(failing_uow, CONFIG, mock_logger)

        result = await limiter.check_and_increment("203.0.113.7", "push")

        assert isinstance(result.error, StorageError)


@pytest.mark.unit
async def test_reset_deletes_current_window(limiter, repos):
    repos.rate_limits.delete_window.return_value = True

    result = await limiter.reset("203.0.113.7", "push")

    assert result == Success(value=True)
    repos.rate_limits.delete_window.assert_awaited_once_with(
        ip_address="203.0.113.7",
        endpoint="push",
        window_start=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
    )
