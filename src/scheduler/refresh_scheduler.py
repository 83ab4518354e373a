"""
Background refresh of the current-prices cache entry.
Runs as an asyncio task owned by the application lifespan.
"""

import asyncio
from datetime import datetime
from typing import Optional

from src.cache.ttl_cache import CURRENT_PRICES_KEY, BoundedTTLCache
from src.logging_config import get_logger
from src.services.price_fetcher import PriceFetcher
from src.utils.time_utils import day_ahead_window

logger = get_logger(__name__)


class RefreshScheduler:
    """Re-fetches the next 24 hours of prices on a fixed interval."""

    def __init__(self, fetcher: PriceFetcher, cache: BoundedTTLCache, interval_seconds: float = 3600):
        self.fetcher = fetcher
        self.cache = cache
        self.interval_seconds = interval_seconds
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self.last_refresh: Optional[datetime] = None

    async def start(self) -> None:
        """Start the scheduler background task."""
        if self._running:
            logger.warning("Scheduler already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._scheduler_loop())
        logger.info("Scheduler started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        """Stop the scheduler."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Scheduler stopped")

    async def _scheduler_loop(self) -> None:
        """Main scheduler loop; the first refresh happens one interval after start."""
        while self._running:
            await asyncio.sleep(self.interval_seconds)

            if not self._running:
                break

            await self.run_once()

    async def run_once(self) -> bool:
        """
        Fetch the current window and store it under the current-prices key.

        Returns:
            True if the cache was refreshed, False if the fetch failed
        """
        start, end = day_ahead_window()
        logger.info("Starting scheduled price refresh", start=start.isoformat(), end=end.isoformat())

        try:
            points = await self.fetcher.fetch_prices(start, end)
        except Exception as e:
            logger.error("Scheduled price refresh failed", error=str(e))
            return False

        self.cache.put(CURRENT_PRICES_KEY, points)
        self.last_refresh = start
        logger.info("Completed scheduled price refresh", count=len(points))
        return True

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._running
