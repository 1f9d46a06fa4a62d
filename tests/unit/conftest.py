import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.utils.frozen_clock import FrozenClock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.save = AsyncMock(side_effect=lambda user: user)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.save = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.has_recent_active_token = AsyncMock(return_value=False)
    uow.password_reset_tokens.find_active_by_value = AsyncMock(return_value=None)
    uow.password_reset_tokens.mark_used = AsyncMock(return_value=True)
    uow.password_reset_tokens.mark_all_used_for_user = AsyncMock(return_value=0)
    uow.password_reset_tokens.delete_expired = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send_password_reset_notification = AsyncMock()
    return notifier


@pytest.fixture
def mock_hasher():
    hasher = MagicMock()
    hasher.hash = MagicMock(side_effect=lambda plaintext: f"hashed::{plaintext}")
    return hasher
