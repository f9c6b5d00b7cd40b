"""CSRF Token Manager for the OAuth `state` parameter.

Tokens are 64 hex characters from the OS CSPRNG, stored with an absolute
expiry, and consumed exactly once: validation deletes the row in the same
statement that reads it, so two concurrent callbacks with the same state
cannot both succeed.
"""

import secrets
from datetime import datetime, timedelta

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.constants import CSRF_TOKEN_BYTES
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import StorageError
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.errors import InvalidOrExpiredError
from ghmcp.domain.protocols import LoggerProtocol, Repositories, UnitOfWorkProtocol


class CsrfTokenManager:
    """Issues and consumes single-use OAuth state tokens."""

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        *,
        ttl: timedelta = timedelta(minutes=10),
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._logger = logger.bind(component="csrf_token_manager")
        self._ttl = ttl
        self._clock = clock

    async def issue(self) -> Result[str, StorageError]:
        """Generate and persist a new state token.

        Returns:
            Success(token) once the token is stored, Failure(StorageError)
            otherwise. A token is never returned unless it was persisted.
        """
        token = secrets.token_hex(CSRF_TOKEN_BYTES)
        now = self._clock()
        expires_at = now + self._ttl

        async def _work(repos: Repositories) -> None:
            await repos.csrf_tokens.add(token, expires_at=expires_at, now=now)

        match await self._uow.run("csrf.issue", _work):
            case Failure(error=error):
                return Failure(error=error)
            case _:
                self._logger.debug("csrf_token_issued", expires_at=expires_at.isoformat())
                return Success(value=token)

    async def validate_and_consume(
        self, token: str
    ) -> Result[None, InvalidOrExpiredError | StorageError]:
        """Check a returned state token and burn it.

        The token is deleted whether or not it had expired, so it can never
        be tried twice.

        Args:
            token: The `state` value GitHub echoed back.

        Returns:
            Success(None) for a known, unexpired, unused token.
            Failure(InvalidOrExpiredError) for unknown, reused or expired tokens.
            Failure(StorageError) if the store failed.
        """
        if not token:
            return Failure(error=_invalid("CSRF state token missing"))

        async def _work(repos: Repositories) -> datetime | None:
            return await repos.csrf_tokens.consume(token)

        match await self._uow.run("csrf.consume", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=None):
                self._logger.warning("csrf_token_rejected", reason="unknown")
                return Failure(error=_invalid("CSRF state token is invalid"))
            case Success(value=expires_at) if expires_at <= self._clock():
                self._logger.warning("csrf_token_rejected", reason="expired")
                return Failure(error=_invalid("CSRF state token has expired"))
            case _:
                return Success(value=None)


def _invalid(message: str) -> InvalidOrExpiredError:
    return InvalidOrExpiredError(code=ErrorCode.CSRF_TOKEN_INVALID, message=message)
