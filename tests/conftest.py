from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure `import cex_client.*` works when running tests without installing the package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cex_client.exchange.adapters.clock import Clock  # noqa: E402
from cex_client.exchange.adapters.transport import Transport  # noqa: E402


class FakeClock(Clock):
    """Deterministic clock; sleeping advances time instantly."""

    def __init__(self, wall: float = 1_400_000_000.0, mono: float = 100.0) -> None:
        self.wall_time = wall
        self.mono_time = mono
        self.sleeps: list[float] = []

    def wall(self) -> float:
        return self.wall_time

    def monotonic(self) -> float:
        return self.mono_time

    def advance(self, seconds: float) -> None:
        self.wall_time += seconds
        self.mono_time += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)


class RecordingTransport(Transport):
    """Returns queued payloads and records each request with the clock time it was sent."""

    def __init__(self, clock: FakeClock | None = None, responses: list[Any] | None = None) -> None:
        self.clock = clock
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def request(self, method: str, path: str, params: dict[str, Any]) -> Any:
        self.calls.append(
            {
                "method": method,
                "path": path,
                "params": dict(params),
                "at": self.clock.monotonic() if self.clock else None,
            }
        )
        if self.responses:
            resp = self.responses.pop(0)
            if isinstance(resp, Exception):
                raise resp
            return resp
        return {}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def transport(clock: FakeClock) -> RecordingTransport:
    return RecordingTransport(clock)
