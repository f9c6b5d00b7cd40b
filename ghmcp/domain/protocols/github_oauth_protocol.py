"""GitHub OAuth protocol (port).

Covers the three calls the login flow needs: exchange an authorization
code for tokens, refresh an expiring token, and fetch the authenticated
user's profile.
"""

from dataclasses import dataclass
from typing import Protocol

from ghmcp.core.result import Result
from ghmcp.domain.errors import GitHubOAuthError


@dataclass(frozen=True, slots=True, kw_only=True)
class OAuthTokens:
    """Token response from GitHub's access_token endpoint.

    Attributes:
        access_token: Bearer token for the GitHub API.
        token_type: Usually "bearer".
        scope: Comma separated granted scopes.
        refresh_token: Present when token expiration is enabled for the app.
        expires_in: Access token lifetime in seconds, if reported.
    """

    access_token: str
    token_type: str = "bearer"
    scope: str = ""
    refresh_token: str | None = None
    expires_in: int | None = None

    def __repr__(self) -> str:
        """Representation without token material."""
        return (
            f"OAuthTokens(token_type={self.token_type!r}, scope={self.scope!r}, "
            f"expires_in={self.expires_in})"
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class GitHubUser:
    """Profile of the authenticated GitHub user.

    Attributes:
        github_id: Numeric account id.
        login: Username.
        name: Display name.
        email: Public email.
        avatar_url: Avatar image URL.
    """

    github_id: int
    login: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


class GitHubOAuthProtocol(Protocol):
    """GitHub OAuth client port."""

    def authorize_url(self, *, state: str, scopes: tuple[str, ...]) -> str:
        """URL the user is sent to in order to grant access."""
        ...

    async def exchange_code(self, code: str) -> Result[OAuthTokens, GitHubOAuthError]:
        """Exchange an authorization code for tokens."""
        ...

    async def refresh_token(
        self, refresh_token: str
    ) -> Result[OAuthTokens, GitHubOAuthError]:
        """Exchange a refresh token for a new token pair."""
        ...

    async def get_user(self, access_token: str) -> Result[GitHubUser, GitHubOAuthError]:
        """Fetch the profile of the token's owner."""
        ...
