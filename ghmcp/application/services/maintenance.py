"""Maintenance: periodic purge of expired and retained-out rows.

Expired CSRF tokens and sessions are already rejected at validation time,
so purging is housekeeping only and never affects correctness. Audit rows
are the exception: removing rows older than the retention window is the
only way they ever leave the table.

Each purge runs in its own transaction. One failing purge is reported and
the others still run.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import timedelta

from ghmcp.application.services.audit_logger import AuditLogger
from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.errors import DomainError
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.protocols import LoggerProtocol, Repositories, UnitOfWorkProtocol


@dataclass(slots=True, kw_only=True)
class MaintenanceReport:
    """Rows removed by one maintenance run.

    Attributes:
        csrf_tokens: Expired CSRF tokens deleted.
        sessions: Expired sessions deleted.
        audit_logs: Audit rows past retention deleted.
        rate_limit_windows: Stale rate limit counters deleted.
        failures: Names of purges that failed.
    """

    csrf_tokens: int = 0
    sessions: int = 0
    audit_logs: int = 0
    rate_limit_windows: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether every purge succeeded."""
        return not self.failures


class MaintenanceService:
    """Runs one round of purges.

    Args:
        uow: Unit of work over the shared store.
        audit: Audit logger (owns audit retention).
        logger: Structured logger.
        audit_retention: Audit rows older than this are deleted.
        rate_limit_window: Longest configured rate limit window; counters of
            windows that started before now minus this are deleted.
        clock: Time source.
    """

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        audit: AuditLogger,
        logger: LoggerProtocol,
        *,
        audit_retention: timedelta = timedelta(days=90),
        rate_limit_window: timedelta = timedelta(seconds=60),
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._audit = audit
        self._logger = logger.bind(component="maintenance")
        self._audit_retention = audit_retention
        self._rate_limit_window = rate_limit_window
        self._clock = clock

    async def run_once(self) -> MaintenanceReport:
        """Purge everything that is due and report the counts."""
        now = self._clock()
        report = MaintenanceReport()

        async def _csrf(repos: Repositories) -> int:
            return await repos.csrf_tokens.delete_expired(before=now)

        async def _sessions(repos: Repositories) -> int:
            return await repos.sessions.delete_expired(before=now)

        async def _rate_limits(repos: Repositories) -> int:
            return await repos.rate_limits.delete_windows_before(
                now - self._rate_limit_window
            )

        report.csrf_tokens = await self._purge(
            "csrf_tokens", report, lambda: self._uow.run("maintenance.csrf", _csrf)
        )
        report.sessions = await self._purge(
            "sessions",
            report,
            lambda: self._uow.run("maintenance.sessions", _sessions),
        )
        report.audit_logs = await self._purge(
            "audit_logs",
            report,
            lambda: self._audit.purge_older_than(now - self._audit_retention),
        )
        report.rate_limit_windows = await self._purge(
            "rate_limit_windows",
            report,
            lambda: self._uow.run("maintenance.rate_limits", _rate_limits),
        )

        self._logger.info(
            "maintenance_completed",
            csrf_tokens=report.csrf_tokens,
            sessions=report.sessions,
            audit_logs=report.audit_logs,
            rate_limit_windows=report.rate_limit_windows,
            failures=report.failures,
        )
        return report

    async def _purge(
        self,
        name: str,
        report: MaintenanceReport,
        purge: Callable[[], Awaitable[Result[int, DomainError]]],
    ) -> int:
        match await purge():
            case Success(value=count):
                return count
            case Failure(error=error):
                self._logger.warning(
                    "maintenance_purge_failed", table=name, error_code=error.code.value
                )
                report.failures.append(name)
                return 0


class MaintenanceScheduler:
    """Calls MaintenanceService.run_once() every `interval_seconds`.

    The first run happens immediately on start(). A run that raises is
    logged and the loop keeps going.

    Usage:
        scheduler = MaintenanceScheduler(service, logger, interval_seconds=3600)
        scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        service: MaintenanceService,
        logger: LoggerProtocol,
        *,
        interval_seconds: float = 3600,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._service = service
        self._logger = logger.bind(component="maintenance_scheduler")
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._runs = 0

    @property
    def running(self) -> bool:
        """Whether the background loop is active."""
        return self._task is not None and not self._task.done()

    @property
    def runs(self) -> int:
        """Completed runs since start."""
        return self._runs

    def start(self) -> None:
        """Start the background loop (no-op if already running)."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        self._logger.info("maintenance_scheduler_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._logger.info("maintenance_scheduler_stopped", runs=self._runs)

    async def _loop(self) -> None:
        while True:
            try:
                await self._service.run_once()
            except Exception as e:
                self._logger.error("maintenance_run_failed", error=e)
            self._runs += 1
            await asyncio.sleep(self._interval)
