"""Unit tests for MaintenanceService and MaintenanceScheduler."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from ghmcp.application.services import (
    MaintenanceReport,
    MaintenanceScheduler,
    MaintenanceService,
)
from ghmcp.core.enums import ErrorCode
from ghmcp.core.result import Failure, Success
from ghmcp.domain.errors import AuditError


@pytest.fixture
def audit() -> AsyncMock:
    audit = AsyncMock()
    audit.purge_older_than.return_value = Success(value=5)
    return audit


@pytest.fixture
def service(stub_uow, audit, mock_logger, clock) -> MaintenanceService:
    return MaintenanceService(
        stub_uow,
        audit,
        mock_logger,
        audit_retention=timedelta(days=90),
        rate_limit_window=timedelta(seconds=60),
        clock=clock,
    )


@pytest.mark.unit
class TestRunOnce:
    """Test one maintenance round."""

    async def test_reports_counts(self, service, repos, audit, clock):
        # Arrange
        repos.csrf_tokens.delete_expired.return_value = 2
        repos.sessions.delete_expired.return_value = 3
        repos.rate_limits.delete_windows_before.return_value = 4

        # Act
        report = await service.run_once()

        # Assert
        assert report == MaintenanceReport(
            csrf_tokens=2, sessions=3, audit_logs=5, rate_limit_windows=4
        )
        assert report.ok
        repos.csrf_tokens.delete_expired.assert_awaited_once_with(before=clock())
        repos.sessions.delete_expired.assert_awaited_once_with(before=clock())
        repos.rate_limits.delete_windows_before.assert_awaited_once_with(
            clock() - timedelta(seconds=60)
        )
        audit.purge_older_than.assert_awaited_once_with(clock() - timedelta(days=90))

    async def test_each_purge_in_own_transaction(self, service, stub_uow, repos):
        repos.csrf_tokens.delete_expired.return_value = 0
        repos.sessions.delete_expired.return_value = 0
        repos.rate_limits.delete_windows_before.return_value = 0

        await service.run_once()

        assert stub_uow.operations == [
            "maintenance.csrf",
            "maintenance.sessions",
            "maintenance.rate_limits",
        ]

    async def test_failure_does_not_stop_other_purges(self, service, repos, audit):
        # Arrange
        repos.csrf_tokens.delete_expired.return_value = 1
        repos.sessions.delete_expired.return_value = 1
        repos.rate_limits.delete_windows_before.return_value = 1
        audit.purge_older_than.return_value = Failure(
            error=AuditError(code=ErrorCode.AUDIT_PURGE_FAILED, message="down")
        )

        # Act
        report = await service.run_once()

        # Assert
        assert report.failures == ["audit_logs"]
        assert not report.ok
        assert report.rate_limit_windows == 1

    async def test_storage_down(self, failing_uow, audit, mock_logger):
        service = MaintenanceService(failing_uow, audit, mock_logger)

        report = await service.run_once()

        assert report.failures == ["csrf_tokens", "sessions", "rate_limit_windows"]
        assert report.audit_logs == 5


@pytest.mark.unit
class TestMaintenanceScheduler:
    """Test the background loop."""

    def test_rejects_non_positive_interval(self, mock_logger):
        with pytest.raises(ValueError):
            MaintenanceScheduler(AsyncMock(), mock_logger, interval_seconds=0)

    async def test_runs_immediately_and_stops(self, mock_logger):
        # Arrange
        service = AsyncMock()
        scheduler = MaintenanceScheduler(service, mock_logger, interval_seconds=3600)

        # Act
        scheduler.start()
        await asyncio.sleep(0.01)

        # Assert
        assert scheduler.running
        assert scheduler.runs == 1
        service.run_once.assert_awaited_once()

        await scheduler.stop()
        assert not scheduler.running

    async def test_start_twice_is_noop(self, mock_logger):
        service = AsyncMock()
        scheduler = MaintenanceScheduler(service, mock_logger, interval_seconds=3600)

        scheduler.start()
        scheduler.start()
        await asyncio.sleep(0.01)
        await scheduler.stop()

        assert service.run_once.await_count == 1

    async def test_failing_run_keeps_loop_alive(self, mock_logger):
        service = AsyncMock()
        service.run_once.side_effect = RuntimeError("boom")
        scheduler = MaintenanceScheduler(service, mock_logger, interval_seconds=0.01)

        scheduler.start()
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert scheduler.runs >= 2
        mock_logger.error.assert_called()

    async def test_stop_without_start(self, mock_logger):
        scheduler = MaintenanceScheduler(AsyncMock(), mock_logger)

        await scheduler.stop()

        assert not scheduler.running
