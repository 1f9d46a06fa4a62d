"""Scheduler for sweeping expired password reset tokens."""

import logging
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore
from apscheduler.triggers.interval import IntervalTrigger  # type: ignore
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock
from src.app.use_cases.password_reset import SweepExpiredResetTokensUseCase

logger = logging.getLogger(__name__)

JOB_ID = "sweep_expired_password_reset_tokens"


class ExpiredTokenSweepScheduler:
    """Runs the expired token sweep on a fixed interval."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        clock: Clock,
        interval_minutes: int = 60,
    ):
        self.session_factory = session_factory
        self.clock = clock
        self.interval_minutes = interval_minutes
        self.scheduler = AsyncIOScheduler()

    def register(self):
        """Add the sweep job to the scheduler."""
        self.scheduler.add_job(
            self.sweep,
            IntervalTrigger(minutes=self.interval_minutes),
            id=JOB_ID,
            name="Sweep expired password reset tokens",
            replace_existing=True,
        )

    def start(self):
        """Start the scheduler (requires a running event loop)."""
        logger.info(
            "Starting expired token sweep scheduler (every %d minutes)",
            self.interval_minutes,
        )
        self.register()
        self.scheduler.start()

    def shutdown(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Expired token sweep scheduler stopped")

    async def sweep(self) -> int:
        async with self.session_factory() as session:
            use_case = SweepExpiredResetTokensUseCase(SqlAlchemyUnitOfWork(session), self.clock)
            return await use_case.execute()
