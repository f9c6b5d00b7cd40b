"""Session Manager: opaque bearer sessions with absolute expiry.

Validation is one conditional UPDATE (touch last_used_at only while
expires_at > now), so an expired session is never extended and a
concurrent revoke always wins. Expiry is absolute: using a session
never pushes expires_at forward.
"""

import secrets
from datetime import timedelta

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.constants import SESSION_TOKEN_BYTES
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import (
    ExpiredError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.protocols import (
    LoggerProtocol,
    Repositories,
    SessionData,
    UnitOfWorkProtocol,
)
from ghmcp.domain.value_objects import ClientMeta


class SessionManager:
    """Creates, validates and revokes bearer sessions.

    Dependencies (injected via constructor):
        - UnitOfWorkProtocol: transactional access to sessions
        - LoggerProtocol: structured logging (session tokens are never logged)
    """

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        *,
        default_ttl: timedelta = timedelta(hours=24),
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._logger = logger.bind(component="session_manager")
        self._default_ttl = default_ttl
        self._clock = clock

    async def create_session(
        self,
        user_id: int,
        ttl: timedelta | None = None,
        client_meta: ClientMeta | None = None,
    ) -> Result[str, ValidationError | StorageError]:
        """Create a session for a user.

        Args:
            user_id: Authenticated user.
            ttl: Lifetime; defaults to the configured session lifetime.
            client_meta: Client address and user agent to remember.

        Returns:
            Success(session token), Failure(ValidationError) for a
            non-positive ttl, or Failure(StorageError).
        """
        lifetime = ttl if ttl is not None else self._default_ttl
        if lifetime <= timedelta(0):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="Session lifetime must be positive",
                    field="ttl",
                )
            )

        meta = client_meta or ClientMeta.unknown()
        now = self._clock()
        token = secrets.token_urlsafe(SESSION_TOKEN_BYTES)
        session_data = SessionData(
            session_token=token,
            user_id=user_id,
            expires_at=now + lifetime,
            last_used_at=now,
            ip_address=meta.ip_address,
            user_agent=meta.user_agent,
            created_at=now,
        )

        async def _work(repos: Repositories) -> SessionData:
            return await repos.sessions.add(session_data)

        match await self._uow.run("session.create", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=stored):
                self._logger.info(
                    "session_created",
                    user_id=user_id,
                    session_id=stored.id,
                    expires_at=stored.expires_at.isoformat(),
                )
                return Success(value=token)

    async def validate(
        self, session_token: str
    ) -> Result[int, UnauthenticatedError | ExpiredError | StorageError]:
        """Resolve a bearer token to its user and record the use.

        Returns:
            Success(user_id) for a live session.
            Failure(UnauthenticatedError) for unknown or revoked tokens.
            Failure(ExpiredError) for sessions past expires_at.
            Failure(StorageError) if the store failed.
        """
        if not session_token:
            return Failure(error=_unauthenticated())

        now = self._clock()

        async def _work(repos: Repositories) -> int | SessionData | None:
            user_id = await repos.sessions.touch_if_active(session_token, now=now)
            if user_id is not None:
                return user_id
            return await repos.sessions.find_by_token(session_token)

        match await self._uow.run("session.validate", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=int() as user_id):
                return Success(value=user_id)
            case Success(value=SessionData() as expired):
                self._logger.info("session_expired", user_id=expired.user_id)
                return Failure(
                    error=ExpiredError(
                        code=ErrorCode.SESSION_EXPIRED,
                        message="Session has expired",
                        resource_type="session",
                        expired_at=expired.expires_at,
                    )
                )
            case _:
                return Failure(error=_unauthenticated())

    async def revoke(self, session_token: str) -> Result[bool, StorageError]:
        """Delete one session (idempotent).

        Returns:
            Success(True) if it existed, Success(False) otherwise.
        """

        async def _work(repos: Repositories) -> bool:
            return await repos.sessions.delete_by_token(session_token)

        result = await self._uow.run("session.revoke", _work)
        if isinstance(result, Success) and result.value:
            self._logger.info("session_revoked")
        return result

    async def revoke_all(self, user_id: int) -> Result[int, StorageError]:
        """Delete every session of a user (logout everywhere).

        Returns:
            Success(number of sessions removed).
        """

        async def _work(repos: Repositories) -> int:
            return await repos.sessions.delete_all_for_user(user_id)

        result = await self._uow.run("session.revoke_all", _work)
        if isinstance(result, Success):
            self._logger.info("sessions_revoked", user_id=user_id, count=result.value)
        return result


def _unauthenticated() -> UnauthenticatedError:
    return UnauthenticatedError(
        code=ErrorCode.SESSION_INVALID,
        message="Session is invalid or has been revoked",
    )
