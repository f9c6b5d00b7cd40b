"""OAuth Login Flow: GitHub authorization code login and token refresh.

Orchestrates the components end to end:

    start()    -> CSRF token issued -> GitHub authorize URL
    complete() -> CSRF consumed -> code exchanged -> GitHub user fetched
               -> user upserted -> credential stored -> session created
    refresh()  -> refresh token read -> exchanged -> credential stored

Every outcome of complete() and refresh() is audited (login /
login_failed / token_issued / token_refreshed).

Architecture:
- Application layer orchestrator
- Imports only from core and domain (GitHub is behind GitHubOAuthProtocol)
- Uses Result types for error handling
"""

from dataclasses import dataclass
from datetime import timedelta

from ghmcp.application.services.audit_logger import AuditLogger
from ghmcp.application.services.credential_store import CredentialStore
from ghmcp.application.services.csrf_token_manager import CsrfTokenManager
from ghmcp.application.services.session_manager import SessionManager
from ghmcp.application.services.user_directory import UserDirectory
from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.constants import GITHUB_OAUTH_SCOPES
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import DomainError
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.enums import AuditAction
from ghmcp.domain.errors import GitHubOAuthError
from ghmcp.domain.protocols import (
    Credential,
    GitHubOAuthProtocol,
    LoggerProtocol,
    UserData,
)
from ghmcp.domain.value_objects import ClientMeta


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginStart:
    """Where to send the user, and the state GitHub will echo back."""

    authorize_url: str
    state: str


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginResult:
    """Outcome of a completed login.

    Attributes:
        user: The logged-in user.
        session_token: Bearer token for subsequent requests.
    """

    user: UserData
    session_token: str

    def __repr__(self) -> str:
        return f"LoginResult(user_id={self.user.id}, session_token=<redacted>)"


class OAuthLoginFlow:
    """GitHub OAuth login orchestrator.

    Dependencies (injected via constructor):
        - CsrfTokenManager: state parameter
        - GitHubOAuthProtocol: code exchange and user lookup
        - UserDirectory: user rows
        - CredentialStore: encrypted GitHub tokens
        - SessionManager: bearer sessions
        - AuditLogger: security trail
    """

    def __init__(
        self,
        *,
        csrf: CsrfTokenManager,
        github: GitHubOAuthProtocol,
        users: UserDirectory,
        credentials: CredentialStore,
        sessions: SessionManager,
        audit: AuditLogger,
        logger: LoggerProtocol,
        scopes: tuple[str, ...] = GITHUB_OAUTH_SCOPES,
        clock: Clock = utc_now,
    ) -> None:
        self._csrf = csrf
        self._github = github
        self._users = users
        self._credentials = credentials
        self._sessions = sessions
        self._audit = audit
        self._logger = logger.bind(component="oauth_login_flow")
        self._scopes = scopes
        self._clock = clock

    async def start(self) -> Result[LoginStart, DomainError]:
        """Issue a state token and build the GitHub authorize URL."""
        match await self._csrf.issue():
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=state):
                return Success(
                    value=LoginStart(
                        authorize_url=self._github.authorize_url(
                            state=state, scopes=self._scopes
                        ),
                        state=state,
                    )
                )

    async def complete(
        self,
        code: str,
        state: str,
        client_meta: ClientMeta | None = None,
        *,
        error: str | None = None,
        error_description: str | None = None,
    ) -> Result[LoginResult, DomainError]:
        """Finish a login from the OAuth callback parameters.

        Args:
            code: Authorization code from GitHub.
            state: CSRF state echoed by GitHub.
            client_meta: Caller's address and user agent.
            error: `error` callback parameter (user denied access, etc.).
            error_description: `error_description` callback parameter.

        Returns:
            Success(LoginResult) with the user and a new session token.
            Failure(InvalidOrExpiredError) for a bad state.
            Failure(GitHubOAuthError) if GitHub refused or is unreachable.
            Failure(ValidationError | EncryptionError | StorageError) otherwise.

        Side Effects:
            - Consumes the state token (always, when present)
            - Audits login + token_issued on success, login_failed on failure
        """
        meta = client_meta or ClientMeta.unknown()

        # Step 1: The state is checked before anything else, even on error
        match await self._csrf.validate_and_consume(state):
            case Failure(error=csrf_error):
                return await self._login_failed(csrf_error, meta)
            case _:
                pass

        # Step 2: GitHub redirected back with an error instead of a code
        if error is not None or not code:
            return await self._login_failed(
                GitHubOAuthError(
                    code=ErrorCode.GITHUB_OAUTH_FAILED,
                    message=error_description or error or "Authorization code missing",
                ),
                meta,
            )

        # Step 3: Exchange the code for tokens
        match await self._github.exchange_code(code):
            case Failure(error=exchange_error):
                return await self._login_failed(exchange_error, meta)
            case Success(value=tokens):
                pass

        # Step 4: Who is this?
        match await self._github.get_user(tokens.access_token):
            case Failure(error=user_error):
                return await self._login_failed(user_error, meta)
            case Success(value=github_user):
                pass

        # Step 5: Persist user, credential and session
        match await self._users.upsert_github_user(github_user):
            case Failure(error=upsert_error):
                return await self._login_failed(upsert_error, meta)
            case Success(value=user):
                pass

        expires_at = (
            self._clock() + timedelta(seconds=tokens.expires_in)
            if tokens.expires_in is not None
            else None
        )
        match await self._credentials.put_credential(
            user.id,
            tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_at=expires_at,
            username=user.username,
        ):
            case Failure(error=store_error):
                return await self._login_failed(store_error, meta, user_id=user.id)
            case _:
                pass

        match await self._sessions.create_session(user.id, client_meta=meta):
            case Failure(error=session_error):
                return await self._login_failed(session_error, meta, user_id=user.id)
            case Success(value=session_token):
                pass

        # Step 6: Audit the successful login
        await self._audit.record(
            AuditAction.TOKEN_ISSUED,
            user_id=user.id,
            resource="github_token",
            client_meta=meta,
            metadata={"scope": tokens.scope},
        )
        await self._audit.record(
            AuditAction.LOGIN,
            user_id=user.id,
            resource="session",
            client_meta=meta,
            metadata={"username": user.username},
        )
        self._logger.info("login_succeeded", user_id=user.id)
        return Success(value=LoginResult(user=user, session_token=session_token))

    async def refresh(
        self, user_id: int, client_meta: ClientMeta | None = None
    ) -> Result[Credential, DomainError]:
        """Renew the stored GitHub access token with its refresh token.

        GitHub may or may not rotate the refresh token; the old one is kept
        when no new one is returned.
        """
        meta = client_meta or ClientMeta.unknown()

        match await self._credentials.get_refresh_token(user_id):
            case Failure(error=error):
                return await self._refresh_failed(error, user_id, meta)
            case Success(value=refresh_token):
                pass

        match await self._github.refresh_token(refresh_token):
            case Failure(error=error):
                return await self._refresh_failed(error, user_id, meta)
            case Success(value=tokens):
                pass

        expires_at = (
            self._clock() + timedelta(seconds=tokens.expires_in)
            if tokens.expires_in is not None
            else None
        )
        result = await self._credentials.put_credential(
            user_id,
            tokens.access_token,
            refresh_token=tokens.refresh_token or refresh_token,
            expires_at=expires_at,
        )
        match result:
            case Failure(error=error):
                return await self._refresh_failed(error, user_id, meta)
            case _:
                pass

        await self._audit.record(
            AuditAction.TOKEN_REFRESHED,
            user_id=user_id,
            resource="github_token",
            client_meta=meta,
        )
        self._logger.info("token_refreshed", user_id=user_id)
        return result

    async def _login_failed(
        self,
        error: DomainError,
        meta: ClientMeta,
        *,
        user_id: int | None = None,
    ) -> Result[LoginResult, DomainError]:
        self._logger.warning(
            "login_failed", user_id=user_id, error_code=error.code.value
        )
        await self._audit.record(
            AuditAction.LOGIN_FAILED,
            user_id=user_id,
            resource="session",
            client_meta=meta,
            success=False,
            error_message=str(error),
        )
        return Failure(error=error)

    async def _refresh_failed(
        self, error: DomainError, user_id: int, meta: ClientMeta
    ) -> Result[Credential, DomainError]:
        self._logger.warning(
            "token_refresh_failed", user_id=user_id, error_code=error.code.value
        )
        await self._audit.record(
            AuditAction.TOKEN_REFRESHED,
            user_id=user_id,
            resource="github_token",
            client_meta=meta,
            success=False,
            error_message=str(error),
        )
        return Failure(error=error)
