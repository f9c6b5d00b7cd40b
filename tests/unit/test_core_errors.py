"""Unit tests for the error taxonomy and Result types."""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time

from ghmcp.core.clock import utc_now
from ghmcp.core.enums import ErrorCode
from ghmcp.core.errors import DomainError, ExpiredError, NotFoundError, StorageError
from ghmcp.core.result import Failure, Success
from ghmcp.domain.errors import (
    DecryptionError,
    EncryptionError,
    InvalidOrExpiredError,
    RateLimitedError,
)


@pytest.mark.unit
class TestErrorCode:
    """Test error code grouping."""

    @pytest.mark.parametrize(
        "code",
        [ErrorCode.SESSION_INVALID, ErrorCode.SESSION_EXPIRED, ErrorCode.CSRF_TOKEN_INVALID],
    )
    def test_authentication_failures(self, code):
        assert code.is_authentication_failure is True

    @pytest.mark.parametrize(
        "code",
        [
            ErrorCode.RATE_LIMIT_EXCEEDED,
            ErrorCode.STORAGE_UNAVAILABLE,
            ErrorCode.CREDENTIAL_NOT_FOUND,
        ],
    )
    def test_other_codes_are_not_authentication_failures(self, code):
        assert code.is_authentication_failure is False


@pytest.mark.unit
class TestDomainErrors:
    """Test error dataclasses."""

    def test_str_includes_code_and_message(self):
        error = NotFoundError(
            code=ErrorCode.CREDENTIAL_NOT_FOUND,
            message="No GitHub credential stored for user",
            resource_type="credential",
            resource_id="42",
        )

        assert str(error) == "credential_not_found: No GitHub credential stored for user"

    def test_errors_are_values_not_exceptions(self):
        assert not issubclass(DomainError, BaseException)
        assert issubclass(DecryptionError, EncryptionError)
        assert issubclass(InvalidOrExpiredError, DomainError)

    def test_errors_are_immutable(self):
        error = StorageError(code=ErrorCode.STORAGE_UNAVAILABLE, message="down")

        with pytest.raises(AttributeError):
            error.message = "up"  # type: ignore[misc]

    def test_rate_limited_error_carries_retry_after(self):
        error = RateLimitedError(
            code=ErrorCode.RATE_LIMIT_EXCEEDED,
            message="Rate limit exceeded for push",
            endpoint="push",
            limit=3,
            retry_after=17,
        )

        assert error.retry_after == 17
        assert error.limit == 3

    def test_expired_error_records_expiry(self):
        expired_at = datetime(2024, 1, 1, tzinfo=UTC)

        error = ExpiredError(
            code=ErrorCode.SESSION_EXPIRED,
            message="Session has expired",
            resource_type="session",
            expired_at=expired_at,
        )

        assert error.expired_at == expired_at


@pytest.mark.unit
class TestResult:
    """Test pattern matching on Result."""

    @pytest.mark.parametrize(
        ("result", "expected"),
        [(Success(value=1), "ok:1"), (Failure(error="boom"), "err:boom")],
    )
    def test_match(self, result, expected):
        match result:
            case Success(value=value):
                outcome = f"ok:{value}"
            case Failure(error=error):
                outcome = f"err:{error}"

        assert outcome == expected


@pytest.mark.unit
@freeze_time("2024-06-01 08:30:00")
def test_utc_now_is_timezone_aware_utc():
    now = utc_now()

    assert now == datetime(2024, 6, 1, 8, 30, tzinfo=UTC)
    assert now.utcoffset() == timedelta(0)
