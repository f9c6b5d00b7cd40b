"""Credential Store: encrypted GitHub tokens, one per user.

Flow (put_credential):
1. Encrypt access and refresh tokens in memory
2. Upsert the single github_tokens row for the user (one transaction)
3. Return the credential as stored

Flow (get_credential):
1. Load the row
2. Reject missing (NotFoundError) or expired (ExpiredError) credentials
3. Decrypt just in time and return

Auditing (token_issued / token_read) is left to the caller.

Architecture:
- Application layer ONLY imports from core and domain
- Storage and encryption are injected via protocols
"""

from datetime import datetime, timedelta

from ghmcp.core.clock import Clock, utc_now
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import (
    ExpiredError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.errors import EncryptionError
from ghmcp.domain.protocols import (
    Credential,
    CredentialRecord,
    EncryptionProtocol,
    LoggerProtocol,
    Repositories,
    UnitOfWorkProtocol,
)


class CredentialStore:
    """Stores and returns GitHub OAuth credentials.

    Dependencies (injected via constructor):
        - UnitOfWorkProtocol: transactional access to github_tokens/users
        - EncryptionProtocol: AES-256-GCM token encryption
        - LoggerProtocol: structured logging (never receives tokens)
    """

    def __init__(
        self,
        uow: UnitOfWorkProtocol,
        encryption: EncryptionProtocol,
        logger: LoggerProtocol,
        *,
        default_ttl: timedelta = timedelta(days=30),
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the store.

        Args:
            uow: Unit of work over the shared store.
            encryption: Token encryption service.
            logger: Structured logger.
            default_ttl: Credential lifetime when no expiry is given.
            clock: Time source.
        """
        self._uow = uow
        self._encryption = encryption
        self._logger = logger.bind(component="credential_store")
        self._default_ttl = default_ttl
        self._clock = clock

    async def put_credential(
        self,
        user_id: int,
        access_token: str,
        refresh_token: str | None = None,
        expires_at: datetime | None = None,
        username: str | None = None,
    ) -> Result[
        Credential,
        ValidationError | NotFoundError | EncryptionError | StorageError,
    ]:
        """Encrypt and upsert the credential of a user.

        Args:
            user_id: Owning user.
            access_token: Plaintext access token.
            refresh_token: Plaintext refresh token, if any.
            expires_at: Access token expiry; defaults to now + default_ttl.
            username: GitHub login; looked up from users when omitted.

        Returns:
            Success(Credential) as stored.
            Failure(ValidationError) for an empty access token.
            Failure(NotFoundError) when username is omitted and the user is unknown.
            Failure(EncryptionError) or Failure(StorageError) otherwise.
        """
        if not access_token:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="Access token must not be empty",
                    field="access_token",
                )
            )

        now = self._clock()
        expiry = expires_at if expires_at is not None else now + self._default_ttl

        match self._encryption.encrypt(access_token):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=encrypted_token):
                pass

        encrypted_refresh_token: str | None = None
        if refresh_token is not None:
            match self._encryption.encrypt(refresh_token):
                case Failure(error=error):
                    return Failure(error=error)
                case Success(value=encrypted_refresh_token):
                    pass

        async def _work(repos: Repositories) -> bool:
            name = username
            if name is None:
                user = await repos.users.find_by_id(user_id)
                if user is None:
                    return False
                name = user.username
            await repos.credentials.upsert(
                CredentialRecord(
                    user_id=user_id,
                    username=name,
                    encrypted_token=encrypted_token,
                    encrypted_refresh_token=encrypted_refresh_token,
                    expires_at=expiry,
                ),
                now=now,
            )
            return True

        match await self._uow.run("credential.put", _work):
            case Failure(error=storage_error):
                return Failure(error=storage_error)
            case Success(value=False):
                return Failure(error=_user_not_found(user_id))
            case Success():
                pass

        self._logger.info(
            "credential_stored",
            user_id=user_id,
            expires_at=expiry.isoformat(),
            has_refresh_token=refresh_token is not None,
        )
        return Success(
            value=Credential(
                user_id=user_id,
                access_token=access_token,
                refresh_token=refresh_token,
                expires_at=expiry,
            )
        )

    async def get_credential(
        self, user_id: int
    ) -> Result[
        Credential, NotFoundError | ExpiredError | EncryptionError | StorageError
    ]:
        """Return the decrypted credential of a user.

        Returns:
            Success(Credential) for a live credential.
            Failure(NotFoundError) if none is stored.
            Failure(ExpiredError) if expires_at has passed.
            Failure(DecryptionError) if the key changed or data was tampered with.
            Failure(StorageError) if the store failed.
        """
        match await self._load(user_id, "credential.get"):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=record):
                pass

        if record.expires_at <= self._clock():
            self._logger.info("credential_expired", user_id=user_id)
            return Failure(
                error=ExpiredError(
                    code=ErrorCode.CREDENTIAL_EXPIRED,
                    message="GitHub credential has expired",
                    resource_type="credential",
                    expired_at=record.expires_at,
                )
            )

        match self._decrypt(record.encrypted_token, user_id):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=access_token):
                pass

        refresh_token: str | None = None
        if record.encrypted_refresh_token is not None:
            match self._decrypt(record.encrypted_refresh_token, user_id):
                case Failure(error=error):
                    return Failure(error=error)
                case Success(value=refresh_token):
                    pass

        return Success(
            value=Credential(
                user_id=user_id,
                access_token=access_token,
                refresh_token=refresh_token,
                expires_at=record.expires_at,
            )
        )

    async def get_refresh_token(
        self, user_id: int
    ) -> Result[str, NotFoundError | EncryptionError | StorageError]:
        """Return the decrypted refresh token, even if the access token expired.

        Returns:
            Success(refresh token).
            Failure(NotFoundError) with CREDENTIAL_NOT_FOUND or
            REFRESH_TOKEN_NOT_FOUND.
        """
        match await self._load(user_id, "credential.get_refresh_token"):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=record):
                pass

        if record.encrypted_refresh_token is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.REFRESH_TOKEN_NOT_FOUND,
                    message="No refresh token stored for user",
                    resource_type="refresh_token",
                    resource_id=str(user_id),
                )
            )
        return self._decrypt(record.encrypted_refresh_token, user_id)

    async def delete_credential(self, user_id: int) -> Result[bool, StorageError]:
        """Remove the credential of a user (idempotent).

        Returns:
            Success(True) if a credential was removed, Success(False) if
            there was none.
        """

        async def _work(repos: Repositories) -> bool:
            return await repos.credentials.delete_by_user_id(user_id)

        result = await self._uow.run("credential.delete", _work)
        if isinstance(result, Success) and result.value:
            self._logger.info("credential_deleted", user_id=user_id)
        return result

    async def _load(
        self, user_id: int, operation: str
    ) -> Result[CredentialRecord, NotFoundError | StorageError]:
        async def _work(repos: Repositories) -> CredentialRecord | None:
            return await repos.credentials.find_by_user_id(user_id)

        match await self._uow.run(operation, _work):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=None):
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.CREDENTIAL_NOT_FOUND,
                        message="No GitHub credential stored for user",
                        resource_type="credential",
                        resource_id=str(user_id),
                    )
                )
            case Success(value=record):
                return Success(value=record)

    def _decrypt(self, ciphertext: str, user_id: int) -> Result[str, EncryptionError]:
        result = self._encryption.decrypt(ciphertext)
        if isinstance(result, Failure):
            self._logger.error(
                "credential_decryption_failed",
                user_id=user_id,
                error_code=result.error.code.value,
            )
        return result


def _user_not_found(user_id: int) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message="User does not exist",
        resource_type="user",
        resource_id=str(user_id),
    )
