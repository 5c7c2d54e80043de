from bilge_monitor.domain.actions import NO_ACTION, Action, Notification
from bilge_monitor.domain.context import MonitorContext, initial_state_for
from bilge_monitor.domain.enums import BlinkPattern, ButtonEventKind, DeviceState, NotificationKind
from bilge_monitor.domain.reading import SensorReading
from bilge_monitor.domain.thresholds import LiveThresholds, ThresholdProvider, Thresholds

__all__ = [
    "NO_ACTION",
    "Action",
    "BlinkPattern",
    "ButtonEventKind",
    "DeviceState",
    "LiveThresholds",
    "MonitorContext",
    "Notification",
    "NotificationKind",
    "SensorReading",
    "ThresholdProvider",
    "Thresholds",
    "initial_state_for",
]
