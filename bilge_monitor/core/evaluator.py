"""Emergency condition evaluator.

Derives the tier-1 and tier-2 flags from a reading and the live thresholds.
Tier-1 carries rising and falling edge timestamps because the state machine
debounces on them.  Tier-2 has no debounce of its own; it rides on tier-1's
EMERGENCY state.

An invalid reading does not suppress evaluation here.  It only sets
``sensor_error``, which outranks the emergency flags in the transition
table.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from bilge_monitor.domain.context import MonitorContext
from bilge_monitor.domain.reading import SensorReading

logger = logging.getLogger(__name__)


class EmergencyEdges(BaseModel):
    """Which flags changed during one evaluation."""

    tier1_rose: bool = False
    tier1_fell: bool = False
    tier2_rose: bool = False
    tier2_fell: bool = False
    sensor_error_detected: bool = False
    sensor_error_cleared: bool = False

    model_config = {"frozen": True}

    @property
    def changed(self) -> bool:
        return any(self.model_dump().values())


def update_emergency_conditions(
    ctx: MonitorContext,
    reading: SensorReading,
    now_ms: int,
) -> EmergencyEdges:
    """Refresh sensor_error and the tier flags on *ctx*, recording tier-1 edges."""
    previous_error = ctx.sensor_error
    ctx.sensor_error = not reading.valid
    ctx.last_level_cm = reading.level_cm

    thresholds = ctx.thresholds

    previous_tier1 = ctx.tier1_active
    ctx.tier1_active = reading.level_cm >= thresholds.tier1_level_cm
    if ctx.tier1_active and not previous_tier1:
        ctx.tier1_true_since_ms = now_ms
    elif previous_tier1 and not ctx.tier1_active:
        ctx.tier1_false_since_ms = now_ms

    previous_tier2 = ctx.tier2_active
    ctx.tier2_active = reading.level_cm >= thresholds.tier2_level_cm

    edges = EmergencyEdges(
        tier1_rose=ctx.tier1_active and not previous_tier1,
        tier1_fell=previous_tier1 and not ctx.tier1_active,
        tier2_rose=ctx.tier2_active and not previous_tier2,
        tier2_fell=previous_tier2 and not ctx.tier2_active,
        sensor_error_detected=ctx.sensor_error and not previous_error,
        sensor_error_cleared=previous_error and not ctx.sensor_error,
    )
    if edges.changed:
        _log_edges(edges, reading, ctx)
    return edges


def _log_edges(edges: EmergencyEdges, reading: SensorReading, ctx: MonitorContext) -> None:
    if edges.sensor_error_detected:
        logger.warning("Sensor error detected")
    if edges.sensor_error_cleared:
        logger.info("Sensor error cleared")
    if edges.tier1_rose:
        logger.info(
            "Tier 1 emergency conditions detected: level=%.2f cm (threshold=%.2f cm)",
            reading.level_cm, ctx.thresholds.tier1_level_cm,
        )
    if edges.tier1_fell:
        logger.info("Tier 1 emergency conditions cleared: level=%.2f cm", reading.level_cm)
    if edges.tier2_rose:
        logger.info(
            "Tier 2 urgent conditions detected: level=%.2f cm (threshold=%.2f cm)",
            reading.level_cm, ctx.thresholds.tier2_level_cm,
        )
    if edges.tier2_fell:
        logger.info("Tier 2 urgent conditions cleared: level=%.2f cm", reading.level_cm)
