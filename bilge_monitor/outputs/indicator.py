"""Status LED patterns.

``pattern_for_state`` is the pure state-to-pattern mapping.  ``BlinkSchedule``
is the non-blocking blinker an LED driver can call every poll tick to learn
whether the LED should currently be lit.
"""

from __future__ import annotations

from bilge_monitor.domain.enums import BlinkPattern, DeviceState

_STATE_PATTERNS: dict[DeviceState, BlinkPattern] = {
    DeviceState.NORMAL: BlinkPattern.OFF,
    DeviceState.CONFIG: BlinkPattern.SLOW_BLINK,
    DeviceState.ERROR: BlinkPattern.FAST_BLINK,
    DeviceState.EMERGENCY: BlinkPattern.SOLID,
}

# Half-period of each blinking pattern
FAST_BLINK_MS = 100
SLOW_BLINK_MS = 500


def pattern_for_state(state: DeviceState) -> BlinkPattern:
    return _STATE_PATTERNS[state]


class BlinkSchedule:
    """Tracks the LED level for the active pattern."""

    def __init__(self, pattern: BlinkPattern = BlinkPattern.OFF, now_ms: int = 0) -> None:
        self._pattern = pattern
        self._lit = pattern == BlinkPattern.SOLID
        self._last_toggle_ms = now_ms

    @property
    def pattern(self) -> BlinkPattern:
        return self._pattern

    @property
    def lit(self) -> bool:
        return self._lit

    def set_pattern(self, pattern: BlinkPattern, now_ms: int) -> None:
        if pattern == self._pattern:
            return
        self._pattern = pattern
        self._last_toggle_ms = now_ms
        # Blinking patterns start lit so the change is visible at once
        self._lit = pattern != BlinkPattern.OFF

    def update(self, now_ms: int) -> bool:
        """Return whether the LED should be lit at *now_ms*."""
        if self._pattern == BlinkPattern.OFF:
            self._lit = False
        elif self._pattern == BlinkPattern.SOLID:
            self._lit = True
        else:
            half_period = FAST_BLINK_MS if self._pattern == BlinkPattern.FAST_BLINK else SLOW_BLINK_MS
            if now_ms - self._last_toggle_ms >= half_period:
                self._lit = not self._lit
                self._last_toggle_ms = now_ms
        return self._lit
