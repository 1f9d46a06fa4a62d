"""
Request Password Reset Use Case

Issues a single-use reset token and notifies the account owner.
"""

import logging
from datetime import timedelta
from typing import Optional

from src.app.services.clock import Clock
from src.app.services.password_reset_notifier import IPasswordResetNotifier
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PasswordResetToken
from .dtos import RequestPasswordResetResponse
from .policy import (
    DEFAULT_TOKEN_TTL,
    INTERNAL_ERROR_MESSAGE,
    RATE_LIMIT_WINDOW,
    RATE_LIMITED_MESSAGE,
    REQUEST_ACCEPTED_MESSAGE,
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - No email enumeration: unknown emails get the same response as known ones
    - Rate limited: no new token while one created in the last 5 minutes is still active
    - Previous tokens of the user are marked used before a new one is issued,
      so at most one token per user is active
    - Token value is cryptographically random; only its SHA-256 hash is stored
    - Token, invalidation and notification share one transaction
    - Infrastructure failures are logged and reported as a generic error
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: IPasswordResetNotifier,
        clock: Clock,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.notifier = notifier
        self.clock = clock
        self.token_ttl = token_ttl
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, email: str) -> RequestPasswordResetResponse:
        """
        Execute request password reset use case.

        Args:
            email: Email address submitted by the caller

        Returns:
            RequestPasswordResetResponse; success is False only when rate
            limited or on internal error
        """
        try:
            async with self.uow:
                # Lock the user row so concurrent requests for the same user serialize
                user = await self.uow.users.get_by_email(email, for_update=True)

                if user is None:
                    self.logger.warning(
                        "Password reset requested for unknown email: %s", email
                    )
                    return RequestPasswordResetResponse(
                        message=REQUEST_ACCEPTED_MESSAGE, success=True
                    )

                now = self.clock.now()

                if await self.uow.password_reset_tokens.has_recent_active_token(
                    user.id, now - RATE_LIMIT_WINDOW, now
                ):
                    self.logger.info(
                        "Password reset rate limited for user: %s", user.email
                    )
                    return RequestPasswordResetResponse(
                        message=RATE_LIMITED_MESSAGE, success=False
                    )

                await self.uow.password_reset_tokens.mark_all_used_for_user(user.id)

                reset_token, token_value = PasswordResetToken.issue(
                    user.id, now, self.token_ttl
                )
                await self.uow.password_reset_tokens.save(reset_token)

                await self.notifier.send_password_reset_notification(user, token_value)

                await self.uow.commit()
        except Exception:
            self.logger.exception("Failed to process password reset request")
            return RequestPasswordResetResponse(
                message=INTERNAL_ERROR_MESSAGE, success=False
            )

        self.logger.info("Password reset token issued for user: %s", user.email)

        return RequestPasswordResetResponse(
            message=REQUEST_ACCEPTED_MESSAGE, success=True
        )
