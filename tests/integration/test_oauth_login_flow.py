"""End-to-end OAuth login over SQLite with GitHub mocked by pytest-httpx.

Covers the whole callback: state check, code exchange, user lookup, user
upsert, credential storage, session creation and the audit trail.
"""

from datetime import timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from ghmcp.core.enums import ErrorCode
from ghmcp.core.result import Success
from ghmcp.domain.errors import InvalidOrExpiredError
from ghmcp.domain.value_objects import ClientMeta

TOKEN_URL = "https://github.com/login/oauth/access_token"
USER_URL = "https://api.github.com/user"
META = ClientMeta(ip_address="203.0.113.7", user_agent="mcp/1.0")


def _mock_github(httpx_mock, *, access_token="gho_access", refresh="ghr_refresh"):
    httpx_mock.add_response(
        method="POST",
        url=TOKEN_URL,
        json={
            "access_token": access_token,
            "token_type": "bearer",
            "scope": "repo,read:user,read:project",
            "refresh_token": refresh,
            "expires_in": 28800,
        },
    )
    httpx_mock.add_response(
        method="GET",
        url=USER_URL,
        json={
            "id": 583231,
            "login": "octocat",
            "name": "The Octocat",
            "email": None,
            "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        },
    )


async def _start(services) -> str:
    start = (await services.oauth.start()).value
    return parse_qs(urlparse(start.authorize_url).query)["state"][0]


@pytest.mark.integration
class TestLogin:
    """Full login flow."""

    async def test_login_creates_user_credential_and_session(
        self, services, httpx_mock, clock
    ):
        # Arrange
        _mock_github(httpx_mock)
        state = await _start(services)

        # Act
        result = await services.oauth.complete("code123", state, META)

        # Assert
        assert isinstance(result, Success)
        user = result.value.user
        assert user.username == "octocat"
        assert user.github_id == 583231

        session_user = await services.sessions.validate(result.value.session_token)
        assert session_user == Success(value=user.id)

        credential = (await services.credentials.get_credential(user.id)).value
        assert credential.access_token == "gho_access"
        assert credential.expires_at == clock() + timedelta(seconds=28800)

        trail = (await services.audit.query(user_id=user.id)).value
        assert {e.action for e in trail} == {"login", "token_issued"}
        assert all(e.ip_address == "203.0.113.7" for e in trail)

    async def test_second_login_reuses_user(self, services, httpx_mock):
        _mock_github(httpx_mock, access_token="gho_first")
        _mock_github(httpx_mock, access_token="gho_second")

        first = await services.oauth.complete("a", await _start(services), META)
        second = await services.oauth.complete("b", await _start(services), META)

        assert first.value.user.id == second.value.user.id
        credential = (await services.credentials.get_credential(first.value.user.id)).value
        assert credential.access_token == "gho_second"

    async def test_replayed_state_rejected(self, services, httpx_mock):
        _mock_github(httpx_mock)
        state = await _start(services)
        await services.oauth.complete("code123", state, META)

        replay = await services.oauth.complete("code123", state, META)

        assert isinstance(replay.error, InvalidOrExpiredError)
        failures = (await services.audit.query(action="login_failed")).value
        assert len(failures) == 1
        assert failures[0].success is False

    async def test_denied_access(self, services):
        state = await _start(services)

        result = await services.oauth.complete(
            "", state, META, error="access_denied"
        )

        assert result.error.code == ErrorCode.GITHUB_OAUTH_FAILED


@pytest.mark.integration
async def test_refresh_rotates_stored_tokens(services, httpx_mock, clock):
    _mock_github(httpx_mock)
    login = (await services.oauth.complete("code123", await _start(services), META)).value
    httpx_mock.add_response(
        method="POST",
        url=TOKEN_URL,
        json={"access_token": "gho_renewed", "expires_in": 28800},
    )
    clock.advance(hours=7)

    result = await services.oauth.refresh(login.user.id, META)

    assert isinstance(result, Success)
    credential = (await services.credentials.get_credential(login.user.id)).value
    assert credential.access_token == "gho_renewed"
    assert credential.refresh_token == "ghr_refresh"
    assert credential.expires_at == clock() + timedelta(seconds=28800)
