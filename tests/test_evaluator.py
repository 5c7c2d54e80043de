"""Tests for the emergency condition evaluator."""

from bilge_monitor.core.evaluator import update_emergency_conditions
from bilge_monitor.domain.context import MonitorContext
from bilge_monitor.domain.reading import SensorReading
from bilge_monitor.domain.thresholds import Thresholds

# ── Helpers ──────────────────────────────────────────────────────────────────

NORMAL_LEVEL_CM = 10.0
EMERGENCY_LEVEL_CM = 35.0
URGENT_LEVEL_CM = 55.0


def _ctx() -> MonitorContext:
    return MonitorContext(thresholds=Thresholds(tier1_level_cm=30.0, tier2_level_cm=50.0))


def _reading(level_cm: float, valid: bool = True) -> SensorReading:
    return SensorReading(valid=valid, level_cm=level_cm)


# ── Tier flags ───────────────────────────────────────────────────────────────


class TestTierFlags:
    def test_below_threshold_sets_nothing(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 1000)
        assert not ctx.tier1_active
        assert not ctx.tier2_active

    def test_tier1_triggered_records_rising_edge(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(EMERGENCY_LEVEL_CM), 1000)
        assert ctx.tier1_active
        assert not ctx.tier2_active
        assert ctx.tier1_true_since_ms == 1000

    def test_threshold_is_inclusive(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(30.0), 1000)
        assert ctx.tier1_active
        update_emergency_conditions(ctx, _reading(50.0), 1100)
        assert ctx.tier2_active

    def test_tier2_implies_tier1(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(URGENT_LEVEL_CM), 2000)
        assert ctx.tier1_active
        assert ctx.tier2_active

    def test_cleared_records_falling_edge(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(URGENT_LEVEL_CM), 1000)
        update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 3000)
        assert not ctx.tier1_active
        assert not ctx.tier2_active
        assert ctx.tier1_false_since_ms == 3000

    def test_timestamps_only_move_on_edges(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(EMERGENCY_LEVEL_CM), 1000)
        update_emergency_conditions(ctx, _reading(EMERGENCY_LEVEL_CM), 1500)
        update_emergency_conditions(ctx, _reading(EMERGENCY_LEVEL_CM), 2000)
        assert ctx.tier1_true_since_ms == 1000

        update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 2500)
        update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 3000)
        assert ctx.tier1_false_since_ms == 2500
        assert ctx.tier1_true_since_ms == 1000

    def test_uses_thresholds_on_context(self) -> None:
        ctx = _ctx()
        ctx.thresholds = Thresholds(tier1_level_cm=5.0, tier2_level_cm=8.0)
        update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 0)
        assert ctx.tier1_active
        assert ctx.tier2_active


# ── Sensor error ─────────────────────────────────────────────────────────────


class TestSensorError:
    def test_invalid_reading_sets_sensor_error(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, SensorReading.invalid(), 1000)
        assert ctx.sensor_error

    def test_invalid_reading_does_not_suppress_tiers(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(URGENT_LEVEL_CM, valid=False), 1000)
        assert ctx.sensor_error
        assert ctx.tier1_active
        assert ctx.tier2_active

    def test_valid_reading_clears_sensor_error(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, SensorReading.invalid(), 1000)
        update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 1100)
        assert not ctx.sensor_error


# ── Edge report ──────────────────────────────────────────────────────────────


class TestEdges:
    def test_rising_edges_reported(self) -> None:
        ctx = _ctx()
        edges = update_emergency_conditions(ctx, _reading(URGENT_LEVEL_CM), 0)
        assert edges.tier1_rose and edges.tier2_rose
        assert not edges.tier1_fell and not edges.tier2_fell

    def test_steady_reading_reports_no_change(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(EMERGENCY_LEVEL_CM), 0)
        edges = update_emergency_conditions(ctx, _reading(EMERGENCY_LEVEL_CM), 100)
        assert not edges.changed

    def test_sensor_error_edges(self) -> None:
        ctx = _ctx()
        detected = update_emergency_conditions(ctx, SensorReading.invalid(), 0)
        cleared = update_emergency_conditions(ctx, _reading(NORMAL_LEVEL_CM), 100)
        assert detected.sensor_error_detected
        assert cleared.sensor_error_cleared

    def test_last_level_recorded(self) -> None:
        ctx = _ctx()
        update_emergency_conditions(ctx, _reading(42.5), 0)
        assert ctx.last_level_cm == 42.5
