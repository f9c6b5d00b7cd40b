"""GitHub OAuth client (httpx).

Implements GitHubOAuthProtocol against GitHub's OAuth App endpoints:
    - GET  {oauth_base}/login/oauth/authorize      (browser redirect)
    - POST {oauth_base}/login/oauth/access_token   (code / refresh exchange)
    - GET  {api_base}/user                          (profile of the token owner)

GitHub answers failed token exchanges with HTTP 200 and an `error` field,
so both the status code and the body are checked.

Architecture:
    - Infrastructure layer (adapter for an external API)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for expected failures)
"""

from typing import Any
from urllib.parse import urlencode

import httpx

from ghmcp.core.constants import GITHUB_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from ghmcp.core.enums import ErrorCode
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.errors import GitHubOAuthError
from ghmcp.domain.protocols import GitHubUser, LoggerProtocol, OAuthTokens
from ghmcp.infrastructure.enums import InfrastructureErrorCode


class GitHubOAuthClient:
    """GitHub OAuth App client.

    Attributes:
        client_id: OAuth App client id.
        redirect_uri: Registered callback URL.
    """

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        logger: LoggerProtocol,
        oauth_base_url: str = "https://github.com",
        api_base_url: str = "https://api.github.com",
        timeout: float = GITHUB_TIMEOUT_DEFAULT,
    ) -> None:
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self._client_secret = client_secret
        self._oauth_base_url = oauth_base_url.rstrip("/")
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout
        self._logger = logger.bind(component="github_oauth")

    def authorize_url(self, *, state: str, scopes: tuple[str, ...]) -> str:
        """Build the URL the user is redirected to.

        Args:
            state: CSRF token echoed back on the callback.
            scopes: Requested OAuth scopes.
        """
        query = urlencode(
            {
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "scope": " ".join(scopes),
                "state": state,
            }
        )
        return f"{self._oauth_base_url}/login/oauth/authorize?{query}"

    async def exchange_code(self, code: str) -> Result[OAuthTokens, GitHubOAuthError]:
        """Exchange an authorization code for tokens.

        Returns:
            Success(OAuthTokens) or Failure(GitHubOAuthError).
        """
        return await self._token_request(
            {
                "client_id": self.client_id,
                "client_secret": self._client_secret,
                "code": code,
                "redirect_uri": self.redirect_uri,
            },
            operation="exchange_code",
        )

    async def refresh_token(
        self, refresh_token: str
    ) -> Result[OAuthTokens, GitHubOAuthError]:
        """Exchange a refresh token for a new token pair."""
        return await self._token_request(
            {
                "client_id": self.client_id,
                "client_secret": self._client_secret,
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
            operation="refresh_token",
        )

    async def get_user(self, access_token: str) -> Result[GitHubUser, GitHubOAuthError]:
        """Fetch the authenticated user's profile."""
        result = await self._execute(
            "GET",
            f"{self._api_base_url}/user",
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {access_token}",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            operation="get_user",
        )
        match result:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=payload):
                pass

        try:
            user = GitHubUser(
                github_id=int(payload["id"]),
                login=str(payload["login"]),
                name=payload.get("name"),
                email=payload.get("email"),
                avatar_url=payload.get("avatar_url"),
            )
        except (KeyError, TypeError, ValueError):
            return Failure(error=self._invalid_response("get_user"))
        return Success(value=user)

    async def _token_request(
        self, form: dict[str, str], *, operation: str
    ) -> Result[OAuthTokens, GitHubOAuthError]:
        self._logger.info("github_token_request_started", operation=operation)
        result = await self._execute(
            "POST",
            f"{self._oauth_base_url}/login/oauth/access_token",
            headers={"Accept": "application/json"},
            data=form,
            operation=operation,
        )
        match result:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=payload):
                pass

        if "error" in payload:
            self._logger.warning(
                "github_token_request_rejected",
                operation=operation,
                oauth_error=payload.get("error"),
            )
            return Failure(
                error=GitHubOAuthError(
                    code=ErrorCode.GITHUB_OAUTH_FAILED,
                    message=str(
                        payload.get("error_description") or payload.get("error")
                    ),
                    details={"oauth_error": str(payload.get("error"))},
                )
            )

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            return Failure(error=self._invalid_response(operation))

        expires_in = payload.get("expires_in")
        tokens = OAuthTokens(
            access_token=access_token,
            token_type=str(payload.get("token_type") or "bearer"),
            scope=str(payload.get("scope") or ""),
            refresh_token=payload.get("refresh_token") or None,
            expires_in=int(expires_in) if str(expires_in).isdigit() else None,
        )
        self._logger.info(
            "github_token_request_succeeded",
            operation=operation,
            has_refresh_token=tokens.refresh_token is not None,
            expires_in=tokens.expires_in,
        )
        return Success(value=tokens)

    async def _execute(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        operation: str,
        data: dict[str, str] | None = None,
    ) -> Result[dict[str, Any], GitHubOAuthError]:
        """Send a request and decode a JSON object body.

        Timeouts, connection errors and 5xx are transient; 4xx are not.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method, url, headers=headers, data=data
                )
        except httpx.TimeoutException:
            self._logger.warning("github_request_timeout", operation=operation)
            return Failure(
                error=GitHubOAuthError(
                    code=ErrorCode.GITHUB_UNAVAILABLE,
                    message="GitHub request timed out",
                    is_transient=True,
                    details={
                        "infrastructure_code": (
                            InfrastructureErrorCode.EXTERNAL_SERVICE_TIMEOUT.value
                        )
                    },
                )
            )
        except httpx.RequestError as e:
            self._logger.warning(
                "github_connection_error",
                operation=operation,
                error_type=type(e).__name__,
            )
            return Failure(
                error=GitHubOAuthError(
                    code=ErrorCode.GITHUB_UNAVAILABLE,
                    message="Failed to connect to GitHub",
                    is_transient=True,
                    details={
                        "infrastructure_code": (
                            InfrastructureErrorCode.EXTERNAL_SERVICE_UNAVAILABLE.value
                        )
                    },
                )
            )

        status = response.status_code
        if status >= 500:
            self._logger.warning(
                "github_server_error", operation=operation, status_code=status
            )
            return Failure(
                error=GitHubOAuthError(
                    code=ErrorCode.GITHUB_UNAVAILABLE,
                    message=f"GitHub server error: {status}",
                    status_code=status,
                    is_transient=True,
                )
            )
        if status >= 400:
            self._logger.warning(
                "github_request_rejected", operation=operation, status_code=status
            )
            return Failure(
                error=GitHubOAuthError(
                    code=ErrorCode.GITHUB_OAUTH_FAILED,
                    message=f"GitHub rejected the request: {status}",
                    status_code=status,
                    details={
                        "infrastructure_code": (
                            InfrastructureErrorCode.EXTERNAL_SERVICE_ERROR.value
                        ),
                        "response_body": response.text[:RESPONSE_BODY_MAX_LENGTH],
                    },
                )
            )

        try:
            payload = response.json()
        except ValueError:
            return Failure(error=self._invalid_response(operation, status))
        if not isinstance(payload, dict):
            return Failure(error=self._invalid_response(operation, status))
        return Success(value=payload)

    def _invalid_response(
        self, operation: str, status: int | None = None
    ) -> GitHubOAuthError:
        self._logger.warning("github_invalid_response", operation=operation)
        return GitHubOAuthError(
            code=ErrorCode.GITHUB_OAUTH_FAILED,
            message="GitHub returned an unexpected response",
            status_code=status,
        )
