from __future__ import annotations

import asyncio
import logging

from cex_client.exchange.adapters.clock import Clock, SystemClock


class MinIntervalThrottle:
    """
    Enforces a minimum gap between the start of consecutive requests.

    Callers wait in-line; there is no background scheduler. The quota is per
    instance, so separate clients sharing one account are not coordinated.
    """

    def __init__(self, min_interval_sec: float = 1.0, clock: Clock | None = None) -> None:
        if min_interval_sec < 0:
            raise ValueError("min_interval_sec must be >= 0")
        self._min_interval = float(min_interval_sec)
        self._clock = clock or SystemClock()
        self._lock = asyncio.Lock()
        self._last_start: float | None = None
        self._log = logging.getLogger("cexio.throttle")

    @property
    def min_interval_sec(self) -> float:
        return self._min_interval

    @property
    def last_start(self) -> float | None:
        return self._last_start

    async def acquire(self) -> float:
        """Wait out the rest of the interval, mark now as a dispatch start, return seconds waited."""
        async with self._lock:
            waited = 0.0
            if self._last_start is not None:
                remaining = self._min_interval - (self._clock.monotonic() - self._last_start)
                if remaining > 0:
                    self._log.debug("throttle wait %.3fs", remaining)
                    await self._clock.sleep(remaining)
                    waited = remaining
            self._last_start = self._clock.monotonic()
            return waited
