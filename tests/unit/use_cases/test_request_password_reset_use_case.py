"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
import hashlib
import logging
from datetime import datetime, timedelta
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest
from sqlalchemy.exc import OperationalError

from src.app.use_cases.auth import PasswordResetSettings
from src.app.use_cases.auth.request_password_reset_use_case import (
    RESET_REQUESTED_MESSAGE,
    RequestPasswordResetUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import User

PRODUCTION = PasswordResetSettings(base_url="https://swing.example.com", expose_reset_url=False)
DEVELOPMENT = PasswordResetSettings(base_url="http://localhost:3000", expose_reset_url=True)


def make_user(email="user@example.com", password_hash="$2b$12$hashed"):
    return User(email=email, name="Test User", password_hash=password_hash)


def stored_token_args(mock_uow):
    """(email, token_hash, expires_at) of the last update_reset_token call"""
    return mock_uow.users.update_reset_token.call_args.args


def token_from_url(url: str) -> str:
    return parse_qs(urlparse(url).query)["token"][0]


@pytest.mark.asyncio
async def test_successful_password_reset_request(mock_uow, mock_notifier):
    """Eligible account gets a token persisted and a uniform acknowledgment"""
    # Arrange
    mock_uow.users.get_by_email.return_value = make_user()
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    # Act
    before = utcnow()
    result = await use_case.execute("user@example.com")

    # Assert
    assert result.is_ok()
    assert result.value.message == RESET_REQUESTED_MESSAGE

    mock_uow.users.update_reset_token.assert_called_once()
    email, token_hash, expires_at = stored_token_args(mock_uow)
    assert email == "user@example.com"
    assert token_hash
    assert expires_at > before

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_password_reset_token_expires_in_one_hour(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user()
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    before_time = utcnow()
    result = await use_case.execute("user@example.com")
    after_time = utcnow()

    assert result.is_ok()
    _, _, expires_at = stored_token_args(mock_uow)
    assert before_time + timedelta(hours=1) <= expires_at <= after_time + timedelta(hours=1)


@pytest.mark.asyncio
async def test_password_reset_token_ttl_is_configurable(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user()
    settings = PasswordResetSettings(base_url="https://swing.example.com", token_ttl=timedelta(minutes=15))
    use_case = RequestPasswordResetUseCase(mock_uow, settings, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_ok()
    _, _, expires_at = stored_token_args(mock_uow)
    time_until_expiry = expires_at - utcnow()
    assert 14 * 60 < time_until_expiry.total_seconds() <= 15 * 60


@pytest.mark.asyncio
async def test_password_reset_stores_sha256_of_dispatched_token(mock_uow, mock_notifier):
    """The stored value is the digest of the token in the reset link, never the token itself"""
    mock_uow.users.get_by_email.return_value = make_user()
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_ok()
    _, token_hash, _ = stored_token_args(mock_uow)
    _, reset_url, _ = mock_notifier.send_reset_link.call_args.args
    token = token_from_url(reset_url)

    assert len(token) == 64  # 32 bytes, hex encoded
    int(token, 16)
    assert token_hash == hashlib.sha256(token.encode()).hexdigest()
    assert token_hash != token


@pytest.mark.asyncio
async def test_password_reset_non_existent_email(mock_uow, mock_notifier):
    """No email enumeration: unknown email acknowledged, nothing written"""
    mock_uow.users.get_by_email.return_value = None
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute("nonexistent@example.com")

    assert result.is_ok()
    assert result.value.message == RESET_REQUESTED_MESSAGE
    mock_uow.users.update_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()
    mock_notifier.send_reset_link.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_account_without_password(mock_uow, mock_notifier):
    """Social-login-only accounts are acknowledged but never issued a token"""
    mock_uow.users.get_by_email.return_value = make_user(password_hash=None)
    use_case = RequestPasswordResetUseCase(mock_uow, DEVELOPMENT, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_ok()
    assert result.value.message == RESET_REQUESTED_MESSAGE
    assert result.value.reset_url is None
    mock_uow.users.update_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email",
    [
        "",
        "not-an-email",
        "user@",
        "@example.com",
        "user example@example.com",
        "user@@example.com",
        "Foo <user@example.com>",
        " user@example.com",
        "user@example.com ",
    ],
)
async def test_password_reset_invalid_email(mock_uow, mock_notifier, email):
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute(email)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details[0]["field"] == "email"
    mock_uow.users.get_by_email.assert_not_called()
    mock_uow.users.update_reset_token.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_lookup_failure_is_dependency_error(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.side_effect = OperationalError(
        "SELECT users", {}, Exception("database is locked")
    )
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_err()
    assert result.error.code == "DEPENDENCY_ERROR"
    assert "locked" not in result.error.message
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_commit_failure_is_dependency_error(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user()
    mock_uow.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk I/O error"))
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_err()
    assert result.error.code == "DEPENDENCY_ERROR"
    mock_uow.__aexit__.assert_called_once()
    mock_notifier.send_reset_link.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_notifier_failure_keeps_uniform_response(mock_uow, mock_notifier):
    """A failed dispatch must not distinguish known from unknown emails"""
    known_email = "known@example.com"

    async def get_user_by_email(email):
        if email == known_email:
            return make_user(email=known_email)
        return None

    mock_uow.users.get_by_email.side_effect = get_user_by_email
    mock_notifier.send_reset_link.side_effect = ConnectionError("smtp down")
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result_known = await use_case.execute(known_email)
    result_unknown = await use_case.execute("unknown@example.com")

    assert result_known.is_ok()
    assert result_unknown.is_ok()
    assert result_known.value.model_dump() == result_unknown.value.model_dump()
    mock_notifier.send_reset_link.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_password_reset_notifier_failure_is_logged(mock_uow, mock_notifier, caplog):
    mock_uow.users.get_by_email.return_value = make_user()
    mock_notifier.send_reset_link.side_effect = ConnectionError("smtp down")
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    with caplog.at_level(logging.ERROR):
        result = await use_case.execute("user@example.com")

    assert result.is_ok()
    records = [r for r in caplog.records if r.getMessage() == "Failed to dispatch password reset link"]
    assert len(records) == 1
    assert records[0].exc_info[0] is ConnectionError


@pytest.mark.asyncio
async def test_password_reset_accepts_special_use_test_domain(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = None
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute("golfer@club.test")

    assert result.is_ok()
    mock_uow.users.get_by_email.assert_called_once_with("golfer@club.test")


@pytest.mark.asyncio
async def test_password_reset_ineligible_account_generates_no_token(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user(password_hash=None)
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    with patch(
        "src.app.use_cases.auth.request_password_reset_use_case.generate_reset_token"
    ) as generate:
        result = await use_case.execute("user@example.com")

    assert result.is_ok()
    generate.assert_not_called()


@pytest.mark.asyncio
async def test_production_mode_dispatches_link_and_hides_it(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user()
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_ok()
    assert result.value.reset_url is None
    assert result.value.note is None

    mock_notifier.send_reset_link.assert_called_once()
    email, reset_url, expires_at = mock_notifier.send_reset_link.call_args.args
    assert email == "user@example.com"
    assert reset_url.startswith("https://swing.example.com/auth/reset-password?token=")
    assert isinstance(expires_at, datetime)

    token = token_from_url(reset_url)
    assert token not in result.value.model_dump_json()


@pytest.mark.asyncio
async def test_development_mode_returns_reset_url(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user()
    use_case = RequestPasswordResetUseCase(mock_uow, DEVELOPMENT, mock_notifier)

    result = await use_case.execute("user@example.com")

    assert result.is_ok()
    assert result.value.reset_url.startswith("http://localhost:3000/auth/reset-password?token=")
    assert result.value.note
    mock_notifier.send_reset_link.assert_not_called()

    _, token_hash, _ = stored_token_args(mock_uow)
    token = token_from_url(result.value.reset_url)
    assert hashlib.sha256(token.encode()).hexdigest() == token_hash


@pytest.mark.asyncio
async def test_password_reset_consecutive_requests_issue_different_tokens(mock_uow, mock_notifier):
    mock_uow.users.get_by_email.return_value = make_user()
    use_case = RequestPasswordResetUseCase(mock_uow, DEVELOPMENT, mock_notifier)

    result1 = await use_case.execute("user@example.com")
    result2 = await use_case.execute("user@example.com")

    assert result1.value.reset_url != result2.value.reset_url
    hashes = [call.args[1] for call in mock_uow.users.update_reset_token.call_args_list]
    assert len(hashes) == 2
    assert hashes[0] != hashes[1]
    assert mock_uow.commit.call_count == 2


@pytest.mark.asyncio
async def test_password_reset_no_enumeration_same_response(mock_uow, mock_notifier):
    """Valid and unknown emails produce identical responses in production mode"""
    valid_email = "valid@example.com"

    async def get_user_by_email(email):
        if email == valid_email:
            return make_user(email=valid_email)
        return None

    mock_uow.users.get_by_email.side_effect = get_user_by_email
    use_case = RequestPasswordResetUseCase(mock_uow, PRODUCTION, mock_notifier)

    result_valid = await use_case.execute(valid_email)
    result_invalid = await use_case.execute("invalid@example.com")

    assert result_valid.is_ok()
    assert result_invalid.is_ok()
    assert result_valid.value.model_dump() == result_invalid.value.model_dump()
