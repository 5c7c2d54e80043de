"""Scripted sensor for demos and tests.

The water level follows a piecewise-constant profile of ``(from_ms, level)``
steps measured from the sensor's start time.  Fault windows make the sensor
report invalid readings, which is how a disconnected probe looks to the core.
"""

from __future__ import annotations

import logging
from typing import Sequence

from bilge_monitor.domain.reading import SensorReading
from bilge_monitor.foundation.clock import Clock

logger = logging.getLogger(__name__)


class SimulatedSensor:
    """Replays a water-level script against an injected clock.

    Args:
        clock: Time source shared with the polling loop.
        profile: ``(offset_ms, level_cm)`` steps, sorted by offset.  The
            level before the first step is ``profile[0]``'s level.
        faults: ``(from_ms, until_ms)`` windows, offsets like the profile,
            during which readings are invalid.
    """

    def __init__(
        self,
        clock: Clock,
        profile: Sequence[tuple[int, float]] = ((0, 5.0),),
        faults: Sequence[tuple[int, int]] = (),
    ) -> None:
        if not profile:
            raise ValueError("profile must contain at least one step")
        offsets = [offset for offset, _ in profile]
        if offsets != sorted(offsets):
            raise ValueError("profile steps must be sorted by offset")

        self._clock = clock
        self._profile = list(profile)
        self._faults = list(faults)
        self._start_ms = clock.now_ms()

    def level_at(self, offset_ms: int) -> float:
        level = self._profile[0][1]
        for step_offset, step_level in self._profile:
            if step_offset > offset_ms:
                break
            level = step_level
        return level

    def read(self) -> SensorReading:
        offset = self._clock.now_ms() - self._start_ms
        if any(start <= offset < end for start, end in self._faults):
            return SensorReading.invalid()
        return SensorReading(valid=True, level_cm=self.level_at(offset))
