"""bilge-monitor — entry point.

Wires the clock, thresholds, state machine, button tracker, portal and
output sinks together.  Without hardware attached it runs a simulated
flooding scenario with log-only outputs.
"""

from __future__ import annotations

import asyncio
import logging

from bilge_monitor.config import settings
from bilge_monitor.core.state_machine import DeviceStateMachine
from bilge_monitor.domain.context import initial_state_for
from bilge_monitor.domain.thresholds import LiveThresholds
from bilge_monitor.foundation.clock import Clock, SystemClock
from bilge_monitor.inputs.button import ButtonTracker
from bilge_monitor.outputs.console import LogHorn, LogIndicator, LogNotificationSink
from bilge_monitor.outputs.dispatcher import ActionDispatcher
from bilge_monitor.runtime.monitor import MonitorRuntime
from bilge_monitor.runtime.portal import ConfigPortal, TimedPortal
from bilge_monitor.sensors.base import SensorSource
from bilge_monitor.sensors.simulated import SimulatedSensor

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def create_runtime(
    clock: Clock,
    sensor: SensorSource,
    portal: ConfigPortal,
    dispatcher: ActionDispatcher,
    thresholds: LiveThresholds | None = None,
    has_network_credentials: bool = True,
) -> MonitorRuntime:
    """Build a MonitorRuntime from explicitly constructed collaborators."""
    machine = DeviceStateMachine(
        thresholds=thresholds or LiveThresholds(),
        initial_state=initial_state_for(has_network_credentials),
        now_ms=clock.now_ms(),
        debounce_ms=settings.emergency_debounce_ms,
    )
    buttons = ButtonTracker(
        silence_hold_ms=settings.silence_hold_ms,
        debounce_ms=settings.button_debounce_ms,
    )
    return MonitorRuntime(
        clock=clock,
        sensor=sensor,
        machine=machine,
        portal=portal,
        dispatcher=dispatcher,
        buttons=buttons,
        status_interval_ms=settings.status_log_interval_ms,
    )


# Water rises past tier 1, then tier 2, then drains away again
_DEMO_PROFILE = (
    (0, 10.0),
    (2_000, 35.0),
    (6_000, 55.0),
    (12_000, 20.0),
)


def main() -> None:
    clock = SystemClock()
    dispatcher = ActionDispatcher(horn=LogHorn(), indicator=LogIndicator())
    dispatcher.register(LogNotificationSink("sms"))
    dispatcher.register(LogNotificationSink("discord"))

    runtime = create_runtime(
        clock=clock,
        sensor=SimulatedSensor(clock, profile=_DEMO_PROFILE),
        portal=TimedPortal(clock),
        dispatcher=dispatcher,
    )
    logger.info("%s starting in %s", settings.app_name, runtime.machine.state)

    ticks = 16_000 // settings.poll_interval_ms
    try:
        asyncio.run(runtime.run(max_ticks=ticks))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    logger.info("Final status: %s", runtime.status().model_dump())


if __name__ == "__main__":
    main()
