"""MonitorRuntime — the cooperative polling loop.

One tick:
    1. drain button edges and apply the gestures they complete
    2. read the sensor
    3. advance the state machine
    4. start a portal session if the machine just entered CONFIG
    5. hand every action to the dispatcher and advance the LED blink
    6. emit a periodic status line

The runtime owns no transition logic of its own.  Everything that decides
state lives in DeviceStateMachine.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import BaseModel

from bilge_monitor.config import settings
from bilge_monitor.core.state_machine import DeviceStateMachine
from bilge_monitor.domain.actions import Action
from bilge_monitor.domain.enums import ButtonEventKind, DeviceState
from bilge_monitor.foundation.clock import Clock
from bilge_monitor.inputs.button import ButtonTracker
from bilge_monitor.outputs.dispatcher import ActionDispatcher
from bilge_monitor.runtime.portal import ConfigPortal
from bilge_monitor.sensors.base import SensorSource

logger = logging.getLogger(__name__)


class StatusSnapshot(BaseModel):
    """Point-in-time device status for logs and health checks."""

    state: DeviceState
    level_cm: float
    sensor_error: bool
    tier1_active: bool
    tier2_active: bool
    horn_on: bool
    silenced: bool
    ticks: int

    model_config = {"frozen": True}


class MonitorRuntime:
    """Wires the collaborators around a DeviceStateMachine.

    Args:
        clock: Monotonic millisecond time source.
        sensor: Water-level sensor.
        machine: The state machine to drive.
        portal: Configuration portal collaborator.
        dispatcher: Output fan-out for actions.
        buttons: Button tracker; a private one is created when omitted.
        status_interval_ms: How often to log a status line.
    """

    def __init__(
        self,
        clock: Clock,
        sensor: SensorSource,
        machine: DeviceStateMachine,
        portal: ConfigPortal,
        dispatcher: ActionDispatcher,
        buttons: ButtonTracker | None = None,
        status_interval_ms: int | None = None,
    ) -> None:
        self._clock = clock
        self._sensor = sensor
        self._machine = machine
        self._portal = portal
        self._dispatcher = dispatcher
        self.buttons = buttons or ButtonTracker()
        self._status_interval_ms = (
            status_interval_ms if status_interval_ms is not None else settings.status_log_interval_ms
        )
        self._last_status_ms: Optional[int] = None
        self._ticks = 0

        if machine.state == DeviceState.CONFIG:
            self._start_portal()

    @property
    def machine(self) -> DeviceStateMachine:
        return self._machine

    # ── Tick ─────────────────────────────────────────────────────────────

    def tick(self) -> list[Action]:
        """Run one poll iteration and return the actions it dispatched."""
        now = self._clock.now_ms()
        actions: list[Action] = []

        silence_enabled = self._machine.context.in_emergency
        for event in self.buttons.poll(now, silence_enabled=silence_enabled):
            if event.kind == ButtonEventKind.CONFIG_REQUEST:
                self._machine.request_config()
            elif event.kind == ButtonEventKind.SILENCE_TOGGLE:
                actions.append(self._machine.toggle_silence())

        reading = self._sensor.read()
        action = self._machine.update(reading, now, self._portal.is_session_active())
        actions.append(action)

        if action.state_changed == DeviceState.CONFIG and not self._portal.is_session_active():
            self._start_portal()

        for item in actions:
            self._dispatcher.dispatch(item)
        self._dispatcher.refresh(now)

        self._ticks += 1
        self._maybe_log_status(now)
        return [a for a in actions if not a.is_empty]

    async def run(
        self,
        stop: asyncio.Event | None = None,
        poll_interval_ms: int | None = None,
        max_ticks: int | None = None,
    ) -> int:
        """Poll until *stop* is set or *max_ticks* ticks have run.

        Returns the number of ticks executed.
        """
        interval = (poll_interval_ms if poll_interval_ms is not None else settings.poll_interval_ms) / 1000
        executed = 0
        logger.info("Monitor loop started (poll interval %.3f s)", interval)
        while not (stop is not None and stop.is_set()):
            if max_ticks is not None and executed >= max_ticks:
                break
            self.tick()
            executed += 1
            await asyncio.sleep(interval)
        logger.info("Monitor loop stopped after %d tick(s)", executed)
        return executed

    # ── Status ───────────────────────────────────────────────────────────

    def status(self) -> StatusSnapshot:
        ctx = self._machine.context
        return StatusSnapshot(
            state=ctx.current_state,
            level_cm=ctx.last_level_cm,
            sensor_error=ctx.sensor_error,
            tier1_active=ctx.tier1_active,
            tier2_active=ctx.tier2_active,
            horn_on=ctx.horn_on,
            silenced=ctx.notifications_silenced,
            ticks=self._ticks,
        )

    # ── Internals ────────────────────────────────────────────────────────

    def _start_portal(self) -> None:
        logger.info("Starting configuration portal session")
        self._portal.start_session()

    def _maybe_log_status(self, now_ms: int) -> None:
        if (
            self._last_status_ms is not None
            and now_ms - self._last_status_ms < self._status_interval_ms
        ):
            return
        self._last_status_ms = now_ms
        ctx = self._machine.context
        logger.debug(
            "Status: state=%s level=%.2f cm sensor_error=%s tier1=%s",
            ctx.current_state, ctx.last_level_cm, ctx.sensor_error, ctx.tier1_active,
        )
