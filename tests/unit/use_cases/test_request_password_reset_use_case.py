"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.app.use_cases.password_reset import RequestPasswordResetUseCase
from src.app.use_cases.password_reset.policy import (
    INTERNAL_ERROR_MESSAGE,
    RATE_LIMITED_MESSAGE,
    REQUEST_ACCEPTED_MESSAGE,
)
from src.domain.entities import PasswordResetToken, User


def make_user(email: str = "user@example.com") -> User:
    return User(id=uuid4(), email=email, password_hash="hashed_password")


@pytest.mark.asyncio
async def test_successful_password_reset_request(mock_uow, mock_notifier, clock):
    """Known email gets a fresh token and a notification"""
    # Arrange
    user = make_user()
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)

    # Act
    result = await use_case.execute(user.email)

    # Assert
    assert result.success is True
    assert result.message == REQUEST_ACCEPTED_MESSAGE

    mock_uow.users.get_by_email.assert_awaited_once_with(user.email, for_update=True)
    mock_uow.password_reset_tokens.save.assert_awaited_once()
    created_token = mock_uow.password_reset_tokens.save.call_args.args[0]
    assert created_token.user_id == user.id
    assert created_token.used is False
    assert created_token.created_at == clock.now()
    assert created_token.expires_at == clock.now() + timedelta(minutes=45)

    # Notification carries the raw value, the store only its hash
    mock_notifier.send_password_reset_notification.assert_awaited_once()
    notified_user, token_value = mock_notifier.send_password_reset_notification.call_args.args
    assert notified_user is user
    assert created_token.token_hash == PasswordResetToken.hash_value(token_value)
    assert created_token.token_hash != token_value

    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_previous_tokens_invalidated_before_new_token(mock_uow, mock_notifier, clock):
    """Existing tokens of the user are marked used before a new one is saved"""
    user = make_user()
    mock_uow.users.get_by_email.return_value = user

    calls = []
    mock_uow.password_reset_tokens.mark_all_used_for_user.side_effect = (
        lambda user_id: calls.append(("invalidate", user_id))
    )
    mock_uow.password_reset_tokens.save.side_effect = (
        lambda token: calls.append(("save", token.user_id)) or token
    )

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)
    result = await use_case.execute(user.email)

    assert result.success is True
    assert calls == [("invalidate", user.id), ("save", user.id)]


@pytest.mark.asyncio
async def test_password_reset_non_existent_email(mock_uow, mock_notifier, clock):
    """Unknown email - no enumeration, no token, no notification"""
    mock_uow.users.get_by_email.return_value = None

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)
    result = await use_case.execute("nobody@example.com")

    assert result.success is True
    assert result.message == REQUEST_ACCEPTED_MESSAGE

    mock_uow.password_reset_tokens.has_recent_active_token.assert_not_called()
    mock_uow.password_reset_tokens.mark_all_used_for_user.assert_not_called()
    mock_uow.password_reset_tokens.save.assert_not_called()
    mock_notifier.send_password_reset_notification.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_no_enumeration_same_response(mock_uow, mock_notifier, clock):
    """Registered and unknown emails produce identical responses"""
    user = make_user("valid@example.com")

    async def get_user_by_email(email, for_update=False):
        return user if email == user.email else None

    mock_uow.users.get_by_email.side_effect = get_user_by_email

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)

    result_valid = await use_case.execute("valid@example.com")
    result_invalid = await use_case.execute("invalid@example.com")

    assert result_valid == result_invalid


@pytest.mark.asyncio
async def test_password_reset_rate_limited(mock_uow, mock_notifier, clock):
    """Active token from the last 5 minutes blocks a new request"""
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.password_reset_tokens.has_recent_active_token.return_value = True

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)
    result = await use_case.execute(user.email)

    assert result.success is False
    assert result.message == RATE_LIMITED_MESSAGE

    mock_uow.password_reset_tokens.has_recent_active_token.assert_awaited_once_with(
        user.id, clock.now() - timedelta(minutes=5), clock.now()
    )
    mock_uow.password_reset_tokens.mark_all_used_for_user.assert_not_called()
    mock_uow.password_reset_tokens.save.assert_not_called()
    mock_notifier.send_password_reset_notification.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_custom_token_ttl(mock_uow, mock_notifier, clock):
    user = make_user()
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(
        mock_uow, mock_notifier, clock, token_ttl=timedelta(minutes=30)
    )
    await use_case.execute(user.email)

    created_token = mock_uow.password_reset_tokens.save.call_args.args[0]
    assert created_token.expires_at - created_token.created_at == timedelta(minutes=30)


@pytest.mark.asyncio
async def test_notifier_failure_returns_generic_error(mock_uow, mock_notifier, clock):
    """Notifier errors are logged and hidden from the caller; nothing is committed"""
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    mock_notifier.send_password_reset_notification.side_effect = ConnectionError(
        "smtp.internal:25 refused"
    )

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)
    result = await use_case.execute(user.email)

    assert result.success is False
    assert result.message == INTERNAL_ERROR_MESSAGE
    assert "smtp" not in result.message
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_store_failure_is_logged(mock_uow, mock_notifier, clock, caplog):
    mock_uow.users.get_by_email.side_effect = RuntimeError("database unavailable")

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock)
    with caplog.at_level("ERROR"):
        result = await use_case.execute("user@example.com")

    assert result.success is False
    assert result.message == INTERNAL_ERROR_MESSAGE
    assert "Failed to process password reset request" in caplog.text
    assert "database unavailable" in caplog.text


@pytest.mark.asyncio
async def test_injected_logger_receives_events(mock_uow, mock_notifier, clock):
    logger = MagicMock()
    mock_uow.users.get_by_email.return_value = None

    use_case = RequestPasswordResetUseCase(mock_uow, mock_notifier, clock, logger=logger)
    await use_case.execute("ghost@example.com")

    logger.warning.assert_called_once()
    assert "ghost@example.com" in logger.warning.call_args.args
