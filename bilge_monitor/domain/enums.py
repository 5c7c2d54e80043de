"""Controlled enumerations for the bilge-monitor domain.

Every categorical field in the domain MUST reference an enum defined here.
"""

from __future__ import annotations

from enum import Enum


class DeviceState(str, Enum):
    """The single device condition owned by the state machine."""

    ERROR = "ERROR"
    NORMAL = "NORMAL"
    EMERGENCY = "EMERGENCY"
    CONFIG = "CONFIG"

    def __str__(self) -> str:
        return self.value


class NotificationKind(str, Enum):
    """Why a message is being sent to the owner."""

    ALERT = "alert"
    SILENCE_CONFIRM = "silence_confirm"
    UNSILENCE_CONFIRM = "unsilence_confirm"


class BlinkPattern(str, Enum):
    """Patterns the status LED can display."""

    OFF = "off"
    SOLID = "solid"
    SLOW_BLINK = "slow_blink"
    FAST_BLINK = "fast_blink"


class ButtonEventKind(str, Enum):
    """Classified outcome of a physical button press."""

    CONFIG_REQUEST = "config_request"
    SILENCE_TOGGLE = "silence_toggle"
