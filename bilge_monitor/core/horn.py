"""Horn pulse controller.

Pulses the horn with the configured on/off duty cycle while a tier-2
condition is active and alerts are not silenced.  In every other situation
a sounding horn is switched off on the same tick.

The toggle timer is left untouched when the horn is forced off, so after a
silence is lifted the duty cycle resumes from the last real toggle.
"""

from __future__ import annotations

import logging

from bilge_monitor.core.notifications import has_elapsed
from bilge_monitor.domain.context import MonitorContext

logger = logging.getLogger(__name__)


def force_horn_off(ctx: MonitorContext) -> bool | None:
    """Switch the horn off if it is on.  Returns the command to emit, if any."""
    if not ctx.horn_on:
        return None
    ctx.horn_on = False
    return False


def run_horn_controller(ctx: MonitorContext, now_ms: int) -> bool | None:
    """Advance the horn duty cycle for one EMERGENCY tick.

    Returns the new horn level when it changes, otherwise None.
    """
    if not (ctx.tier2_active and not ctx.notifications_silenced):
        command = force_horn_off(ctx)
        if command is not None:
            reason = "notifications silenced" if ctx.notifications_silenced else "tier 2 cleared"
            logger.info("Horn deactivated (%s)", reason)
        return command

    thresholds = ctx.thresholds
    phase_ms = thresholds.horn_on_ms if ctx.horn_on else thresholds.horn_off_ms
    if not has_elapsed(now_ms, ctx.last_horn_toggle_ms, phase_ms):
        return None

    ctx.horn_on = not ctx.horn_on
    ctx.last_horn_toggle_ms = now_ms
    logger.debug("Horn %s", "ON" if ctx.horn_on else "OFF")
    return ctx.horn_on
