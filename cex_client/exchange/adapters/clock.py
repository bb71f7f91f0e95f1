from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Time source used by the nonce generator and the throttle."""

    @abstractmethod
    def wall(self) -> float:
        """Seconds since the epoch."""
        raise NotImplementedError

    @abstractmethod
    def monotonic(self) -> float:
        raise NotImplementedError

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        raise NotImplementedError


class SystemClock(Clock):
    def wall(self) -> float:
        return time.time()

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
