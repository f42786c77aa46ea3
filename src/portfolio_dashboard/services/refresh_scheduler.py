"""Periodic price refresh as a single background task."""

import asyncio
import contextlib
import logging
from typing import Optional

from portfolio_dashboard.services.refresh_orchestrator import RefreshOrchestrator

logger = logging.getLogger(__name__)


class PeriodicRefreshScheduler:
    """
    Calls ``orchestrator.tick()`` every ``interval_seconds``.

    Ticks that land while another cycle is in flight are dropped by the
    orchestrator, not queued, so the loop never builds a backlog.
    """

    def __init__(self, orchestrator: RefreshOrchestrator, interval_seconds: float = 15.0):
        self._orchestrator = orchestrator
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="periodic-price-refresh")
        logger.info("Periodic refresh started (every %ss)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Periodic refresh stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                ran = await self._orchestrator.tick()
            except Exception:
                # Keep the timer alive; the next tick retries
                logger.exception("Periodic refresh tick failed")
                continue
            if not ran:
                logger.debug("Periodic refresh tick dropped")
