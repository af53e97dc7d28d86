"""
Fixed-window rate limiting for plagiarism checks.
"""
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict

from loguru import logger

from .errors import RateLimitExceeded


@dataclass
class RateLimitWindow:
    count: int
    window_start: float


class RateLimiter:
    """
    Per-caller fixed window limiter.

    Each caller gets its own window, opened by its first request. Once the
    window has elapsed the next request opens a fresh one with a zero count.
    """

    def __init__(self, max_requests: int = 20, window_seconds: int = 15 * 60,
                 clock: Callable[[], float] = time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, RateLimitWindow] = {}

    def _expired(self, window: RateLimitWindow, now: float) -> bool:
        return now - window.window_start >= self.window_seconds

    def hit(self, identity: str) -> int:
        """
        Count one request for a caller.

        Args:
            identity: Caller identity (client IP address)

        Returns:
            Requests remaining in the current window

        Raises:
            RateLimitExceeded: If the caller is over quota for this window
        """
        now = self._clock()
        window = self._windows.get(identity)

        if window is None or self._expired(window, now):
            window = RateLimitWindow(count=0, window_start=now)
            self._windows[identity] = window

        window.count += 1

        if window.count > self.max_requests:
            retry_after = max(1, math.ceil(window.window_start + self.window_seconds - now))
            logger.warning(
                f"Rate limit exceeded for {identity}: "
                f"{window.count}/{self.max_requests}, retry after {retry_after}s"
            )
            raise RateLimitExceeded(retry_after=retry_after)

        return self.max_requests - window.count

    def prune(self) -> int:
        """Drop expired windows. Returns the number removed."""
        now = self._clock()
        expired = [key for key, window in self._windows.items() if self._expired(window, now)]
        for key in expired:
            del self._windows[key]
        return len(expired)

    @property
    def tracked_callers(self) -> int:
        return len(self._windows)

    def describe(self) -> str:
        """Human-readable policy, e.g. "20 requests per 15 minutes"."""
        if self.window_seconds % 60 == 0:
            return f"{self.max_requests} requests per {self.window_seconds // 60} minutes"
        return f"{self.max_requests} requests per {self.window_seconds} seconds"
