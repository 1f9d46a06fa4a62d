"""
Development notifier that logs the reset link instead of emailing it.
"""

import logging
from urllib.parse import urlencode

from src.app.services.password_reset_notifier import IPasswordResetNotifier
from src.domain.entities import User

logger = logging.getLogger(__name__)


class LoggingPasswordResetNotifier(IPasswordResetNotifier):
    """
    Logs the password reset link for the user.

    Stands in for an email transport in local development and tests.
    Never use in production: the log line carries a live token.
    """

    def __init__(self, reset_url: str):
        self.reset_url = reset_url

    def build_reset_link(self, token_value: str) -> str:
        return f"{self.reset_url}?{urlencode({'token': token_value})}"

    async def send_password_reset_notification(self, user: User, token_value: str) -> None:
        logger.info(
            "Password reset email (not sent) to %s: %s",
            user.email,
            self.build_reset_link(token_value),
        )
