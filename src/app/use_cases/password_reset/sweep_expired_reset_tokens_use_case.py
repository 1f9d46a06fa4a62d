"""
Sweep Expired Reset Tokens Use Case

Periodic housekeeping, triggered by the scheduler.
"""

import logging
from typing import Optional

from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork


class SweepExpiredResetTokensUseCase:
    """Deletes every token with expires_at <= now, used or not. Never raises."""

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self) -> int:
        """Returns the number of deleted tokens (0 on failure)."""
        try:
            async with self.uow:
                deleted = await self.uow.password_reset_tokens.delete_expired(
                    self.clock.now()
                )
                await self.uow.commit()
        except Exception:
            self.logger.exception("Failed to sweep expired password reset tokens")
            return 0

        self.logger.info("Swept %d expired password reset tokens", deleted)
        return deleted
