"""Fixed-interval rate limiter for outbound Gemini requests."""

import asyncio
import time
from typing import Awaitable, Callable, Optional

from src.utils.logger import logger


class RateLimiter:
    """Single-slot gate enforcing a minimum interval between requests.

    Not a queue: concurrent callers are not ordered beyond what the event loop
    provides. The timestamp is recorded when access is granted, not when the
    guarded request completes.
    """

    def __init__(
        self,
        min_interval_ms: int = 4000,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the limiter.

        Args:
            min_interval_ms: Minimum time between two granted requests, in milliseconds.
            clock: Monotonic clock returning seconds (injectable for tests).
            sleep: Coroutine function used to suspend the caller (injectable for tests).
        """
        self.min_interval = min_interval_ms / 1000
        self._clock = clock
        self._sleep = sleep
        self.last_request_time: Optional[float] = None

    async def acquire(self) -> None:
        """Wait until the minimum interval has passed since the last grant, then grant."""
        if self.last_request_time is not None:
            elapsed = self._clock() - self.last_request_time
            if elapsed < self.min_interval:
                wait_time = self.min_interval - elapsed
                logger.info(f"⏳ Rate limiting: waiting {wait_time:.1f}s before request...")
                await self._sleep(wait_time)
        self.last_request_time = self._clock()
