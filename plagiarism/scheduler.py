"""
Cache Sweeper
Periodically removes expired cache entries and rate-limit windows
"""

import asyncio
from typing import Dict, Optional

from loguru import logger

from .cache import CacheStore
from .rate_limit import RateLimiter


class CacheSweeper:
    """Runs cache cleanup on a fixed interval as a background task."""

    def __init__(self, cache: CacheStore, limiter: Optional[RateLimiter] = None,
                 interval_seconds: float = 120):
        self.cache = cache
        self.limiter = limiter
        self.interval_seconds = interval_seconds
        self.running = False
        self.runs = 0
        self._task: Optional[asyncio.Task] = None

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self._task is not None and not self._task.done():
            return
        self.running = True
        self._task = asyncio.create_task(self._loop())
        logger.info(f"Starting cache sweeper (interval: {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the sweep loop and wait for it to finish."""
        self.running = False
        task, self._task = self._task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Stopped cache sweeper")

    async def _loop(self) -> None:
        while self.running:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.sweep_once()
            except Exception as e:
                logger.error(f"Error in cache sweeper: {e}")

    def sweep_once(self) -> Dict[str, int]:
        """Run one cleanup pass."""
        removed = self.cache.sweep()
        pruned = self.limiter.prune() if self.limiter is not None else 0
        self.runs += 1

        if removed or pruned:
            logger.debug(f"Sweep removed {removed} cache entries, {pruned} rate-limit windows")

        return {"cache_entries": removed, "rate_limit_windows": pruned}
