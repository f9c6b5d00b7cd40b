"""User Directory: GitHub accounts known to the server.

Users are created on first successful login and their display fields are
refreshed on every later login. The GitHub account id is the stable key;
logins can be renamed on GitHub.
"""

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import NotFoundError, StorageError, ValidationError
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.protocols import (
    GitHubUser,
    LoggerProtocol,
    Repositories,
    UnitOfWorkProtocol,
    UserData,
)
from ghmcp.domain.validators import validate_github_username


class UserDirectory:
    """Creates and looks up users."""

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._logger = logger.bind(component="user_directory")
        self._clock = clock

    async def upsert_github_user(
        self, github_user: GitHubUser
    ) -> Result[UserData, ValidationError | StorageError]:
        """Insert or refresh the user behind a GitHub account."""
        try:
            validate_github_username(github_user.login)
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=str(e),
                    field="login",
                )
            )

        now = self._clock()

        async def _work(repos: Repositories) -> UserData:
            return await repos.users.upsert_github_user(
                github_id=github_user.github_id,
                username=github_user.login,
                name=github_user.name,
                email=github_user.email,
                avatar_url=github_user.avatar_url,
                now=now,
            )

        result = await self._uow.run("user.upsert", _work)
        if isinstance(result, Success):
            self._logger.info(
                "user_upserted",
                user_id=result.value.id,
                github_id=github_user.github_id,
            )
        return result

    async def get_user(
        self, user_id: int
    ) -> Result[UserData, NotFoundError | StorageError]:
        """Look up a user by id."""

        async def _work(repos: Repositories) -> UserData | None:
            return await repos.users.find_by_id(user_id)

        match await self._uow.run("user.get", _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=None):
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.USER_NOT_FOUND,
                        message="User does not exist",
                        resource_type="user",
                        resource_id=str(user_id),
                    )
                )
            case Success(value=user):
                return Success(value=user)
