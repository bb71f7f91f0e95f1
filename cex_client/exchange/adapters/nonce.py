from __future__ import annotations

import threading

from cex_client.exchange.adapters.clock import Clock, SystemClock


class NonceGenerator:
    """
    Strictly increasing millisecond nonces, seeded from the wall clock.

    Seeding from wall time keeps nonces above those of earlier runs without
    persisting anything. Two generators started in the same millisecond, or a
    clock that jumps backwards between runs, can still collide; the service
    will reject such requests.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._last = self._now_ms()

    def _now_ms(self) -> int:
        return int(self._clock.wall() * 1000)

    @property
    def last(self) -> int:
        return self._last

    def next(self) -> int:
        with self._lock:
            nonce = max(self._now_ms(), self._last + 1)
            self._last = nonce
            return nonce
