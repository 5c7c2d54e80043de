"""Tests for threshold validation and hot reloading."""

import pytest
from pydantic import ValidationError

from bilge_monitor.domain.thresholds import LiveThresholds, Thresholds
from bilge_monitor.errors import MonitorError, ThresholdValidationError


class TestThresholds:
    def test_defaults(self) -> None:
        t = Thresholds()
        assert t.tier1_level_cm == 30.0
        assert t.tier2_level_cm == 50.0
        assert t.notif_interval_ms == 900_000
        assert t.horn_on_ms == 1000
        assert t.horn_off_ms == 1000

    def test_tier2_must_exceed_tier1(self) -> None:
        with pytest.raises(ValidationError):
            Thresholds(tier1_level_cm=40.0, tier2_level_cm=40.0)

    def test_level_above_sensor_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Thresholds(tier2_level_cm=150.0)

    def test_negative_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Thresholds(tier1_level_cm=-1.0)

    def test_notification_interval_too_short_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Thresholds(notif_interval_ms=500)

    def test_frozen(self) -> None:
        t = Thresholds()
        with pytest.raises(ValidationError):
            t.tier1_level_cm = 10.0  # type: ignore[misc]

    def test_from_settings_matches_defaults(self) -> None:
        assert Thresholds.from_settings() == Thresholds()


class TestLiveThresholds:
    def test_update_replaces_snapshot(self) -> None:
        live = LiveThresholds(Thresholds())
        before = live.current()
        after = live.update(tier1_level_cm=25.0, horn_on_ms=2000)
        assert live.current() is after
        assert after.tier1_level_cm == 25.0
        assert after.horn_on_ms == 2000
        assert before.tier1_level_cm == 30.0

    def test_invalid_update_keeps_previous_values(self) -> None:
        live = LiveThresholds(Thresholds())
        with pytest.raises(ThresholdValidationError) as excinfo:
            live.update(tier1_level_cm=60.0)
        assert live.current().tier1_level_cm == 30.0
        assert excinfo.value.field == "thresholds"

    def test_out_of_range_update_names_field(self) -> None:
        live = LiveThresholds(Thresholds())
        with pytest.raises(ThresholdValidationError) as excinfo:
            live.update(notif_interval_ms=1)
        assert excinfo.value.field == "notif_interval_ms"

    def test_unknown_field_rejected(self) -> None:
        live = LiveThresholds(Thresholds())
        with pytest.raises(ThresholdValidationError) as excinfo:
            live.update(siren_volume=11)
        assert excinfo.value.field == "siren_volume"

    def test_error_is_both_monitor_error_and_value_error(self) -> None:
        live = LiveThresholds(Thresholds())
        with pytest.raises(MonitorError):
            live.update(horn_off_ms=0)
        with pytest.raises(ValueError):
            live.update(horn_off_ms=0)

    def test_raising_both_tiers_together(self) -> None:
        live = LiveThresholds(Thresholds())
        updated = live.update(tier1_level_cm=60.0, tier2_level_cm=80.0)
        assert (updated.tier1_level_cm, updated.tier2_level_cm) == (60.0, 80.0)
