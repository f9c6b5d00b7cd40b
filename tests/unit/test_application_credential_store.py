"""Unit tests for CredentialStore.

Tests cover:
- Tokens are encrypted before they reach the repository
- Default expiry and username lookup
- Missing, expired and undecryptable credentials
- Refresh token retrieval
- Storage failures surface as StorageError

Architecture:
- Mock repositories behind a stub unit of work
- Real EncryptionService (fast, deterministic key)
"""

from datetime import timedelta

import pytest

from ghmcp.application.services import CredentialStore
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import ExpiredError, NotFoundError, StorageError, ValidationError
from ghmcp.core.result import Failure, Success
from ghmcp.domain.errors import DecryptionError
from ghmcp.domain.protocols import CredentialRecord, UserData


@pytest.fixture
def store(stub_uow, encryption, mock_logger, clock) -> CredentialStore:
    return CredentialStore(stub_uow, encryption, mock_logger, clock=clock)


def stored_record(encryption, clock, *, expires_in=timedelta(hours=8), refresh=None):
    return CredentialRecord(
        user_id=42,
        username="octocat",
        encrypted_token=encryption.encrypt("gho_access").value,
        encrypted_refresh_token=(
            encryption.encrypt(refresh).value if refresh is not None else None
        ),
        expires_at=clock() + expires_in,
    )


@pytest.mark.unit
class TestPutCredential:
    """Test storing credentials."""

    async def test_tokens_are_encrypted_before_storage(self, store, repos, encryption, clock):
        # Act
        result = await store.put_credential(
            42, "gho_access", refresh_token="ghr_refresh", username="octocat"
        )

        # Assert
        assert isinstance(result, Success)
        record = repos.credentials.upsert.call_args.args[0]
        assert record.encrypted_token != "gho_access"
        assert encryption.decrypt(record.encrypted_token).value == "gho_access"
        assert encryption.decrypt(record.encrypted_refresh_token).value == "ghr_refresh"
        assert repos.credentials.upsert.call_args.kwargs["now"] == clock()

    async def test_default_expiry_is_thirty_days(self, store, repos, clock):
        result = await store.put_credential(42, "gho_access", username="octocat")

        assert result.value.expires_at == clock() + timedelta(days=30)
        assert repos.credentials.upsert.call_args.args[0].encrypted_refresh_token is None

    async def test_username_looked_up_when_omitted(self, store, repos):
        repos.users.find_by_id.return_value = UserData(
            id=42, github_id=583231, username="octocat"
        )

        result = await store.put_credential(42, "gho_access")

        assert isinstance(result, Success)
        assert repos.credentials.upsert.call_args.args[0].username == "octocat"

    async def test_unknown_user(self, store, repos):
        repos.users.find_by_id.return_value = None

        result = await store.put_credential(42, "gho_access")

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.USER_NOT_FOUND
        repos.credentials.upsert.assert_not_called()

    async def test_empty_access_token_rejected(self, store, repos):
        result = await store.put_credential(42, "", username="octocat")

        assert isinstance(result.error, ValidationError)
        repos.credentials.upsert.assert_not_called()

    async def test_tokens_never_logged(self, store, mock_logger):
        await store.put_credential(42, "gho_access", "ghr_refresh", username="octocat")

        for call in mock_logger.info.call_args_list:
            assert "gho_access" not in repr(call)
            assert "ghr_refresh" not in repr(call)

    async def test_storage_failure(self, failing_uow, encryption, mock_logger, clock):
        store = CredentialStore(failing_uow, encryption, mock_logger, clock=clock)

        result = await store.put_credential(42, "gho_access", username="octocat")

        assert isinstance(result.error, StorageError)
        assert result.error.operation == "credential.put"


@pytest.mark.unit
class TestGetCredential:
    """Test reading credentials."""

    async def test_returns_decrypted_credential(self, store, repos, encryption, clock):
        repos.credentials.find_by_user_id.return_value = stored_record(
            encryption, clock, refresh="ghr_refresh"
        )

        result = await store.get_credential(42)

        assert isinstance(result, Success)
        assert result.value.access_token == "gho_access"
        assert result.value.refresh_token == "ghr_refresh"
        assert "gho_access" not in repr(result.value)

    async def test_missing(self, store, repos):
        repos.credentials.find_by_user_id.return_value = None

        result = await store.get_credential(42)

        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.CREDENTIAL_NOT_FOUND

    async def test_expired(self, store, repos, encryption, clock):
        repos.credentials.find_by_user_id.return_value = stored_record(
            encryption, clock, expires_in=timedelta(0)
        )

        result = await store.get_credential(42)

        assert isinstance(result.error, ExpiredError)
        assert result.error.code == ErrorCode.CREDENTIAL_EXPIRED

    async def test_rotated_key(self, store, repos, encryption, clock, mock_logger):
        record = stored_record(encryption, clock)
        record.encrypted_token = record.encrypted_token[:-4] + "AAAA"
        repos.credentials.find_by_user_id.return_value = record

        result = await store.get_credential(42)

        assert isinstance(result.error, DecryptionError)
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "credential_decryption_failed"


@pytest.mark.unit
class TestRefreshTokenAndDelete:
    """Test get_refresh_token and delete_credential."""

    async def test_refresh_token_available_after_expiry(self, store, repos, encryption, clock):
        repos.credentials.find_by_user_id.return_value = stored_record(
            encryption, clock, expires_in=-timedelta(hours=1), refresh="ghr_refresh"
        )

        result = await store.get_refresh_token(42)

        assert result == Success(value="ghr_refresh")

    async def test_no_refresh_token(self, store, repos, encryption, clock):
        repos.credentials.find_by_user_id.return_value = stored_record(encryption, clock)

        result = await store.get_refresh_token(42)

        assert result.error.code == ErrorCode.REFRESH_TOKEN_NOT_FOUND

    async def test_delete_reports_whether_removed(self, store, repos):
        repos.credentials.delete_by_user_id.return_value = False

        assert await store.delete_credential(42) == Success(value=False)


