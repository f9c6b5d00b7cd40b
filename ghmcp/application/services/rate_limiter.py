"""Fixed-window rate limiter backed by the shared store.

Each (client address, endpoint, window start) triple owns one counter
row. A check is a single upsert that adds one and returns the new
count, so concurrent requests from many workers are counted exactly
once each without a read-modify-write race.

Unlike a fail-open limiter, a store failure is reported to the caller
as StorageError: the answer is unknown, and the caller decides.

Architecture:
    RateLimiter -> UnitOfWorkProtocol -> rate_limits table

Usage:
    result = await rate_limiter.check_and_increment("203.0.113.7", "push")
    match result:
        case Success(value=limits):
            headers["X-RateLimit-Remaining"] = str(limits.remaining)
        case Failure(error=RateLimitedError() as error):
            headers["Retry-After"] = str(error.retry_after)
"""

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import StorageError, ValidationError
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.errors import RateLimitedError
from ghmcp.domain.protocols import LoggerProtocol, Repositories, UnitOfWorkProtocol
from ghmcp.domain.value_objects import RateLimitConfig, RateLimitResult


class RateLimiter:
    """Per-address, per-endpoint fixed-window limiter.

    Args:
        uow: Unit of work over the rate_limits table.
        config: Endpoint to rule mapping.
        logger: Structured logger.
        clock: Time source.
    """

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        config: RateLimitConfig,
        logger: LoggerProtocol,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._config = config
        self._logger = logger.bind(component="rate_limiter")
        self._clock = clock

    @property
    def config(self) -> RateLimitConfig:
        """Rules in effect."""
        return self._config

    async def check_and_increment(
        self, client_address: str, endpoint: str
    ) -> Result[
        RateLimitResult, RateLimitedError | ValidationError | StorageError
    ]:
        """Count one request and decide whether it is allowed.

        Rejected requests are counted too, so hammering a limited endpoint
        does not open it up early.

        Args:
            client_address: Caller's IP address.
            endpoint: Logical endpoint name (e.g. "push").

        Returns:
            Success(RateLimitResult) while the window count is within the limit.
            Failure(RateLimitedError) once the count exceeds it.
            Failure(ValidationError) for an empty address or endpoint.
            Failure(StorageError) if the store failed.
        """
        if not client_address or not endpoint:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="Client address and endpoint are required",
                    field="client_address" if not client_address else "endpoint",
                )
            )

        rule = self._config.rule_for(endpoint)
        now = self._clock()

        if not rule.enabled:
            return Success(
                value=RateLimitResult(
                    limit=rule.limit,
                    remaining=rule.limit,
                    reset_seconds=rule.seconds_until_reset(now),
                )
            )

        window_start = rule.window_start(now)

        async def _work(repos: Repositories) -> int:
            return await repos.rate_limits.increment(
                ip_address=client_address,
                endpoint=endpoint,
                window_start=window_start,
                now=now,
            )

        match await self._uow.run("rate_limit.increment", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=count):
                pass

        reset_seconds = rule.seconds_until_reset(now)
        if count > rule.limit:
            self._logger.warning(
                "rate_limit_exceeded",
                client_address=client_address,
                endpoint=endpoint,
                limit=rule.limit,
                count=count,
                retry_after=reset_seconds,
            )
            return Failure(
                error=RateLimitedError(
                    code=ErrorCode.RATE_LIMIT_EXCEEDED,
                    message=f"Rate limit exceeded for {endpoint}",
                    endpoint=endpoint,
                    limit=rule.limit,
                    retry_after=reset_seconds,
                )
            )

        return Success(
            value=RateLimitResult(
                limit=rule.limit,
                remaining=rule.limit - count,
                reset_seconds=reset_seconds,
            )
        )

    async def reset(
        self, client_address: str, endpoint: str
    ) -> Result[bool, StorageError]:
        """Clear the current window's counter (admin override).

        Returns:
            Success(True) if a counter was removed.
        """
        rule = self._config.rule_for(endpoint)
        window_start = rule.window_start(self._clock())

        async def _work(repos: Repositories) -> bool:
            return await repos.rate_limits.delete_window(
                ip_address=client_address,
                endpoint=endpoint,
                window_start=window_start,
            )

        result = await self._uow.run("rate_limit.reset", _work)
        if isinstance(result, Success) and result.value:
            self._logger.info(
                "rate_limit_reset", client_address=client_address, endpoint=endpoint
            )
        return result
