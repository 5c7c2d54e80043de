"""DeviceStateMachine — the single place where device transitions happen.

Design principles:
    1. One entry point per poll tick: update(reading, now_ms, session_active).
    2. No I/O, no sleeping, constant time.  Side effects leave as an Action.
    3. Thresholds are re-read from the provider on every tick.
    4. Faults are states.  Nothing here raises on valid input.

Transition table (first match wins):

    ERROR      !sensor_error                               -> NORMAL
    ERROR      sensor_error and config_requested           -> CONFIG
    NORMAL     sensor_error                                -> ERROR
    NORMAL     tier1 held for >= debounce                  -> EMERGENCY
    NORMAL     config_requested                            -> CONFIG
    CONFIG     !session_active and !config_requested       -> NORMAL
    EMERGENCY  tier1 clear for >= debounce                 -> NORMAL

Entering NORMAL forces the horn off and clears silence and any pending
config request.  While in EMERGENCY the notification throttler and the horn
pulse controller run on every tick.
"""

from __future__ import annotations

import logging

from bilge_monitor.core.evaluator import update_emergency_conditions
from bilge_monitor.core.horn import force_horn_off, run_horn_controller
from bilge_monitor.core.notifications import run_throttler
from bilge_monitor.core.silence import handle_silence_toggle
from bilge_monitor.domain.actions import NO_ACTION, Action
from bilge_monitor.domain.context import MonitorContext
from bilge_monitor.domain.enums import DeviceState
from bilge_monitor.domain.reading import SensorReading
from bilge_monitor.domain.thresholds import LiveThresholds, ThresholdProvider

logger = logging.getLogger(__name__)

EMERGENCY_DEBOUNCE_MS = 1000

_TRANSITION_REASONS: dict[tuple[DeviceState, DeviceState], str] = {
    (DeviceState.ERROR, DeviceState.NORMAL): "sensor recovered",
    (DeviceState.ERROR, DeviceState.CONFIG): "config requested",
    (DeviceState.NORMAL, DeviceState.ERROR): "sensor error detected",
    (DeviceState.NORMAL, DeviceState.EMERGENCY): "water level above tier 1",
    (DeviceState.NORMAL, DeviceState.CONFIG): "config requested",
    (DeviceState.CONFIG, DeviceState.NORMAL): "config session ended",
    (DeviceState.EMERGENCY, DeviceState.NORMAL): "emergency cleared",
}


def compute_next_state(
    ctx: MonitorContext,
    now_ms: int,
    config_session_active: bool = False,
    debounce_ms: int = EMERGENCY_DEBOUNCE_MS,
) -> DeviceState:
    """Pure transition function.  Reads *ctx*, never mutates it."""
    state = ctx.current_state

    if state == DeviceState.ERROR:
        if not ctx.sensor_error:
            return DeviceState.NORMAL
        if ctx.config_requested:
            return DeviceState.CONFIG

    elif state == DeviceState.NORMAL:
        if ctx.sensor_error:
            return DeviceState.ERROR
        if ctx.tier1_active and now_ms - ctx.tier1_true_since_ms >= debounce_ms:
            return DeviceState.EMERGENCY
        if ctx.config_requested:
            return DeviceState.CONFIG

    elif state == DeviceState.CONFIG:
        if not config_session_active and not ctx.config_requested:
            return DeviceState.NORMAL

    elif state == DeviceState.EMERGENCY:
        if not ctx.tier1_active and now_ms - ctx.tier1_false_since_ms >= debounce_ms:
            return DeviceState.NORMAL

    return state


class DeviceStateMachine:
    """Owns the MonitorContext and drives it one tick at a time.

    Args:
        thresholds: Live threshold source, re-read every tick.
        initial_state: NORMAL, or CONFIG when no network credential exists.
        now_ms: Boot timestamp used to seed the context timers.
        debounce_ms: Continuous-condition time required to enter or leave
            EMERGENCY.
    """

    def __init__(
        self,
        thresholds: ThresholdProvider | None = None,
        initial_state: DeviceState = DeviceState.NORMAL,
        now_ms: int = 0,
        debounce_ms: int = EMERGENCY_DEBOUNCE_MS,
    ) -> None:
        self._thresholds = thresholds or LiveThresholds()
        self._debounce_ms = debounce_ms
        self.context = MonitorContext(
            initial_state=initial_state,
            thresholds=self._thresholds.current(),
            now_ms=now_ms,
        )
        logger.info("Initial state: %s", initial_state)

    @property
    def state(self) -> DeviceState:
        return self.context.current_state

    # ── Inputs ───────────────────────────────────────────────────────────

    def request_config(self) -> bool:
        """Record a short button press.  Only honoured in NORMAL and ERROR."""
        ctx = self.context
        if ctx.current_state not in (DeviceState.NORMAL, DeviceState.ERROR):
            logger.debug("Config request ignored in %s", ctx.current_state)
            return False
        if not ctx.config_requested:
            logger.info("Button pressed: config command received")
        ctx.config_requested = True
        return True

    def toggle_silence(self) -> Action:
        """Apply a qualifying long button hold."""
        return handle_silence_toggle(self.context)

    # ── Tick ─────────────────────────────────────────────────────────────

    def update(
        self,
        reading: SensorReading,
        now_ms: int,
        config_session_active: bool = False,
    ) -> Action:
        """Advance the machine by one poll tick and return the side effects."""
        ctx = self.context
        ctx.thresholds = self._thresholds.current()

        update_emergency_conditions(ctx, reading, now_ms)

        previous = ctx.current_state
        next_state = compute_next_state(ctx, now_ms, config_session_active, self._debounce_ms)

        state_changed = None
        horn_command = None
        notification = None

        if next_state != previous:
            state_changed = next_state
            horn_command = self._enter(previous, next_state, now_ms)

        if ctx.current_state == DeviceState.EMERGENCY:
            notification = run_throttler(ctx, now_ms)
            horn_command = run_horn_controller(ctx, now_ms)
        elif ctx.horn_on:
            horn_command = force_horn_off(ctx)

        if state_changed is None and horn_command is None and notification is None:
            return NO_ACTION
        return Action(
            state_changed=state_changed,
            horn_command=horn_command,
            notification=notification,
        )

    def _enter(self, previous: DeviceState, next_state: DeviceState, now_ms: int) -> bool | None:
        """Commit a transition and run the entry cleanup."""
        ctx = self.context
        ctx.current_state = next_state
        ctx.last_state_change_ms = now_ms

        reason = _TRANSITION_REASONS.get((previous, next_state), "")
        level = logging.WARNING if next_state in (DeviceState.ERROR, DeviceState.EMERGENCY) else logging.INFO
        logger.log(
            level,
            "Transitioning from %s to %s (%s, level=%.2f cm)",
            previous, next_state, reason, ctx.last_level_cm,
        )

        if next_state == DeviceState.CONFIG:
            ctx.config_requested = False

        horn_command = None
        if previous == DeviceState.EMERGENCY and ctx.notifications_silenced:
            logger.info("Auto-clearing notification silence (left EMERGENCY)")
            ctx.notifications_silenced = False

        if next_state == DeviceState.NORMAL:
            horn_command = force_horn_off(ctx)
            ctx.notifications_silenced = False
            ctx.config_requested = False

        return horn_command
