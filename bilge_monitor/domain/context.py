"""MonitorContext — everything the state machine remembers between ticks.

The context is created once at boot and mutated in place on every poll
tick for the life of the process.  Only the state machine and the silence
handler write to it; everything else reads.

Invariants maintained by the core:
    - horn_on implies EMERGENCY, tier2_active and not notifications_silenced
    - notifications_silenced implies EMERGENCY
    - config_requested is cleared once per transition into or out of CONFIG
"""

from __future__ import annotations

from typing import Optional

from bilge_monitor.domain.enums import DeviceState
from bilge_monitor.domain.thresholds import Thresholds


class MonitorContext:
    """Mutable state-machine memory.

    Timestamps are monotonic milliseconds.  ``last_notification_ms`` and
    ``last_horn_toggle_ms`` are None until the first alert or horn toggle,
    which makes the first one due immediately.
    """

    __slots__ = (
        "current_state",
        "last_state_change_ms",
        "tier1_true_since_ms",
        "tier1_false_since_ms",
        "last_notification_ms",
        "last_horn_toggle_ms",
        "tier1_active",
        "tier2_active",
        "horn_on",
        "sensor_error",
        "config_requested",
        "notifications_silenced",
        "last_level_cm",
        "thresholds",
    )

    def __init__(
        self,
        initial_state: DeviceState = DeviceState.NORMAL,
        thresholds: Thresholds | None = None,
        now_ms: int = 0,
    ) -> None:
        self.current_state: DeviceState = initial_state
        self.last_state_change_ms: int = now_ms
        self.tier1_true_since_ms: int = now_ms
        self.tier1_false_since_ms: int = now_ms
        self.last_notification_ms: Optional[int] = None
        self.last_horn_toggle_ms: Optional[int] = None

        self.tier1_active: bool = False
        self.tier2_active: bool = False
        self.horn_on: bool = False
        self.sensor_error: bool = False
        self.config_requested: bool = False
        self.notifications_silenced: bool = False

        self.last_level_cm: float = 0.0
        self.thresholds: Thresholds = thresholds or Thresholds()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def in_emergency(self) -> bool:
        return self.current_state == DeviceState.EMERGENCY

    def horn_allowed(self) -> bool:
        """True when the horn may legitimately be sounding."""
        return (
            self.current_state == DeviceState.EMERGENCY
            and self.tier2_active
            and not self.notifications_silenced
        )

    def summary(self) -> dict:
        """Flat view suitable for logging and status reports."""
        return {
            "state": self.current_state.value,
            "level_cm": round(self.last_level_cm, 2),
            "sensor_error": self.sensor_error,
            "tier1_active": self.tier1_active,
            "tier2_active": self.tier2_active,
            "horn_on": self.horn_on,
            "silenced": self.notifications_silenced,
            "config_requested": self.config_requested,
        }

    # ── Dunder ───────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return (
            f"MonitorContext(state={self.current_state.value}, "
            f"tier1={self.tier1_active}, tier2={self.tier2_active}, "
            f"horn={self.horn_on}, silenced={self.notifications_silenced})"
        )


def initial_state_for(has_network_credentials: bool) -> DeviceState:
    """Boot state: CONFIG until the owner has stored at least one network."""
    return DeviceState.NORMAL if has_network_credentials else DeviceState.CONFIG
