"""Sensor source protocol.

The core consumes one SensorReading per tick.  How the driver samples the
ADC, calibrates and smooths is its own business.
"""

from __future__ import annotations

from typing import Protocol

from bilge_monitor.domain.reading import SensorReading


class SensorSource(Protocol):
    """Anything that can produce the current water-level reading."""

    def read(self) -> SensorReading:
        ...
