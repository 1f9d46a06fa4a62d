"""
Validate Reset Token Use Case

Read-only check that a reset token can still be used.
"""

import logging
from typing import Optional

from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ValidateResetTokenResponse
from .policy import (
    TOKEN_INVALID_MESSAGE,
    TOKEN_VALID_MESSAGE,
    TOKEN_VALIDATION_ERROR_MESSAGE,
)


class ValidateResetTokenUseCase:
    """
    Use case for validating a password reset token.

    Business Rules:
    - Valid iff a token with this value exists, is unused and not expired
    - Never mutates state; repeated calls give identical results
    - Returns the owner's email so the client can show which account is reset
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, token: str) -> ValidateResetTokenResponse:
        try:
            async with self.uow:
                reset_token = await self.uow.password_reset_tokens.find_active_by_value(
                    token, self.clock.now()
                )
                if reset_token is None:
                    return ValidateResetTokenResponse(
                        valid=False, message=TOKEN_INVALID_MESSAGE, email=None
                    )

                user = await self.uow.users.get_by_id(reset_token.user_id)
                if user is None:
                    return ValidateResetTokenResponse(
                        valid=False, message=TOKEN_INVALID_MESSAGE, email=None
                    )

                return ValidateResetTokenResponse(
                    valid=True, message=TOKEN_VALID_MESSAGE, email=user.email
                )
        except Exception:
            self.logger.exception("Failed to validate password reset token")
            return ValidateResetTokenResponse(
                valid=False, message=TOKEN_VALIDATION_ERROR_MESSAGE, email=None
            )
