"""Exception types raised at the bilge-monitor boundaries.

The control core itself never raises on valid input.  Faults such as an
untrustworthy sensor are modelled as device states, not exceptions.
"""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for bilge-monitor errors."""


class ThresholdValidationError(MonitorError, ValueError):
    """Raised when an operator supplies an invalid threshold update."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for '{field}': {reason}")
