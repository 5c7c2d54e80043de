"""Monotonic millisecond clocks.

Every timestamp inside bilge-monitor is an integer count of milliseconds
from a monotonic source.  The clock is injected into the runtime so tests
can drive time by hand instead of sleeping.
"""

from __future__ import annotations

import time
from typing import Protocol


def monotonic_ms() -> int:
    """Return the current monotonic time in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


class Clock(Protocol):
    """Anything that can say what time it is, in milliseconds."""

    def now_ms(self) -> int:
        ...


class SystemClock:
    """Clock backed by the process monotonic timer."""

    def now_ms(self) -> int:
        return monotonic_ms()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, delta_ms: int) -> int:
        if delta_ms < 0:
            raise ValueError("a monotonic clock cannot move backwards")
        self._now += delta_ms
        return self._now

    def set(self, now_ms: int) -> None:
        if now_ms < self._now:
            raise ValueError("a monotonic clock cannot move backwards")
        self._now = now_ms
