"""
Pacer - Minimum spacing between consecutive generator calls.

The first call goes through immediately; each later call waits until the
interval has elapsed since the previous call finished. Tests pass a zero
interval, or a fake sleep/clock, to run deterministically.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional


logger = logging.getLogger(__name__)

DEFAULT_PACING_SECONDS = 1.0


class Pacer:
    """Rate limiter for external API calls."""

    def __init__(
        self,
        interval_seconds: float = DEFAULT_PACING_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval_seconds = interval_seconds
        self._sleep = sleep
        self._clock = clock
        self._last_call: Optional[float] = None

    async def wait(self):
        """Block until the next call is allowed."""
        if self._last_call is None or self.interval_seconds <= 0:
            return
        remaining = self.interval_seconds - (self._clock() - self._last_call)
        if remaining > 0:
            logger.debug(f"Pacing generator calls: sleeping {remaining:.2f}s")
            await self._sleep(remaining)

    def mark(self):
        """Record that a call just finished."""
        self._last_call = self._clock()

    def reset(self):
        self._last_call = None
