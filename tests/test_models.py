"""Smoke tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from bilge_monitor.domain import (
    NO_ACTION,
    Action,
    DeviceState,
    MonitorContext,
    Notification,
    NotificationKind,
    SensorReading,
)


def test_sensor_reading_validates() -> None:
    reading = SensorReading(valid=True, level_cm=42.0)
    assert reading.valid
    assert str(reading) == "42.00 cm (ok)"


def test_invalid_reading() -> None:
    reading = SensorReading.invalid()
    assert not reading.valid
    assert "INVALID" in str(reading)


def test_notification_text_required() -> None:
    with pytest.raises(ValidationError):
        Notification(kind=NotificationKind.ALERT, text="")


def test_action_defaults_to_empty() -> None:
    assert NO_ACTION.is_empty
    assert not Action(horn_command=False).is_empty


def test_device_state_prints_as_value() -> None:
    assert str(DeviceState.EMERGENCY) == "EMERGENCY"
    assert f"{DeviceState.CONFIG}" == "CONFIG"


def test_context_starts_quiet() -> None:
    ctx = MonitorContext(now_ms=500)
    assert ctx.current_state == DeviceState.NORMAL
    assert ctx.tier1_true_since_ms == 500
    assert ctx.last_notification_ms is None
    assert ctx.last_horn_toggle_ms is None
    assert not ctx.horn_allowed()
    assert ctx.summary()["state"] == "NORMAL"
