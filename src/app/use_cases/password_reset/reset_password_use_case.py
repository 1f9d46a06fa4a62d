"""
Reset Password Use Case

Consumes a reset token and sets the user's new password.
"""

import logging
from typing import Optional

from src.app.services.clock import Clock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResetPasswordResponse
from .policy import (
    INTERNAL_ERROR_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    PASSWORD_RESET_SUCCESS_MESSAGE,
    TOKEN_INVALID_MESSAGE,
)


class ResetPasswordUseCase:
    """
    Use case for consuming a password reset token.

    Business Rules:
    - Password and confirmation must match; checked before any store access
    - Token must be unused and not expired
    - Token is single-use: claimed with a conditional update, so a concurrent
      consumer of the same token gets "invalid or expired"
    - Password is hashed through the injected hasher
    - All other tokens of the user are marked used
    - Password update, token consumption and sibling invalidation commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: IPasswordHasher,
        clock: Clock,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def execute(
        self, token: str, new_password: str, confirm_password: str
    ) -> ResetPasswordResponse:
        """
        Execute reset password use case.

        Args:
            token: Raw reset token value from the notification
            new_password: New password
            confirm_password: Repetition of the new password

        Returns:
            ResetPasswordResponse
        """
        if new_password != confirm_password:
            return ResetPasswordResponse(message=PASSWORD_MISMATCH_MESSAGE, success=False)

        try:
            async with self.uow:
                now = self.clock.now()

                reset_token = await self.uow.password_reset_tokens.find_active_by_value(
                    token, now, for_update=True
                )
                if reset_token is None:
                    return ResetPasswordResponse(message=TOKEN_INVALID_MESSAGE, success=False)

                user = await self.uow.users.get_by_id(reset_token.user_id, for_update=True)
                if user is None:
                    return ResetPasswordResponse(message=TOKEN_INVALID_MESSAGE, success=False)

                # Lost the race against another consumer of the same token
                if not await self.uow.password_reset_tokens.mark_used(reset_token.id):
                    await self.uow.rollback()
                    return ResetPasswordResponse(message=TOKEN_INVALID_MESSAGE, success=False)

                user.password_hash = self.password_hasher.hash(new_password)
                user.password_changed_at = now
                await self.uow.users.save(user)

                await self.uow.password_reset_tokens.mark_all_used_for_user(user.id)

                await self.uow.commit()
        except Exception:
            self.logger.exception("Failed to reset password")
            return ResetPasswordResponse(message=INTERNAL_ERROR_MESSAGE, success=False)

        self.logger.info("Password reset completed for user: %s", user.email)

        return ResetPasswordResponse(message=PASSWORD_RESET_SUCCESS_MESSAGE, success=True)
