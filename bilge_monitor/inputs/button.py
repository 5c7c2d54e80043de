"""Button press tracking.

Edges arrive from whatever delivers GPIO interrupts, possibly on another
thread.  The producer side only timestamps the edge and drops it into a
single-producer / single-consumer queue.  Classification runs on the
polling loop:

    - released after less than ``silence_hold_ms``  -> CONFIG_REQUEST
    - held for ``silence_hold_ms`` or longer        -> SILENCE_TOGGLE,
      reported once per physical hold and re-armed only after release

Presses that start within ``debounce_ms`` of the previous press are
contact bounce and are dropped.
"""

from __future__ import annotations

import logging
import queue
from typing import Optional

from pydantic import BaseModel

from bilge_monitor.config import settings
from bilge_monitor.domain.enums import ButtonEventKind

logger = logging.getLogger(__name__)


class ButtonEdge(BaseModel):
    """A raw press or release edge."""

    pressed: bool
    at_ms: int

    model_config = {"frozen": True}


class ButtonEvent(BaseModel):
    """A classified button gesture."""

    kind: ButtonEventKind
    hold_ms: int

    model_config = {"frozen": True}


class ButtonTracker:
    """Turns raw edges into config requests and silence toggles.

    ``press()`` and ``release()`` are the producer side and are safe to call
    from an interrupt or callback thread.  ``poll()`` is the consumer side
    and must only be called from the polling loop.
    """

    def __init__(
        self,
        silence_hold_ms: int | None = None,
        debounce_ms: int | None = None,
    ) -> None:
        self._silence_hold_ms = silence_hold_ms if silence_hold_ms is not None else settings.silence_hold_ms
        self._debounce_ms = debounce_ms if debounce_ms is not None else settings.button_debounce_ms
        self._edges: queue.SimpleQueue[ButtonEdge] = queue.SimpleQueue()

        # Consumer-side state, touched only by poll()
        self._held = False
        self._press_started_ms: Optional[int] = None
        self._last_press_ms: Optional[int] = None
        self._silence_armed = True

    # ── Producer side ────────────────────────────────────────────────────

    def press(self, at_ms: int) -> None:
        self._edges.put(ButtonEdge(pressed=True, at_ms=at_ms))

    def release(self, at_ms: int) -> None:
        self._edges.put(ButtonEdge(pressed=False, at_ms=at_ms))

    # ── Consumer side ────────────────────────────────────────────────────

    @property
    def is_held(self) -> bool:
        return self._held

    def poll(self, now_ms: int, silence_enabled: bool = True) -> list[ButtonEvent]:
        """Drain pending edges and return the gestures they complete.

        Args:
            now_ms: Current poll time, used to detect an ongoing long hold.
            silence_enabled: Whether a long hold may currently fire a
                silence toggle.  While False the hold stays armed.
        """
        events: list[ButtonEvent] = []

        while True:
            try:
                edge = self._edges.get_nowait()
            except queue.Empty:
                break
            event = self._apply_edge(edge, silence_enabled)
            if event is not None:
                events.append(event)

        if self._held and silence_enabled and self._silence_armed:
            hold_ms = now_ms - self._press_started_ms
            if hold_ms >= self._silence_hold_ms:
                self._silence_armed = False
                logger.info("Long hold detected (%d ms): silence toggle", hold_ms)
                events.append(ButtonEvent(kind=ButtonEventKind.SILENCE_TOGGLE, hold_ms=hold_ms))

        return events

    def _apply_edge(self, edge: ButtonEdge, silence_enabled: bool) -> ButtonEvent | None:
        if edge.pressed:
            if self._held:
                return None
            if (
                self._last_press_ms is not None
                and edge.at_ms - self._last_press_ms <= self._debounce_ms
            ):
                logger.debug("Press at %d ms debounced", edge.at_ms)
                return None
            self._held = True
            self._press_started_ms = edge.at_ms
            self._last_press_ms = edge.at_ms
            return None

        if not self._held:
            return None

        self._held = False
        hold_ms = edge.at_ms - self._press_started_ms
        was_armed = self._silence_armed
        self._silence_armed = True

        if hold_ms < self._silence_hold_ms:
            logger.debug("Short press released after %d ms: config request", hold_ms)
            return ButtonEvent(kind=ButtonEventKind.CONFIG_REQUEST, hold_ms=hold_ms)

        # A long hold whose toggle was not yet reported during the hold
        if was_armed and silence_enabled:
            logger.info("Long hold released (%d ms): silence toggle", hold_ms)
            return ButtonEvent(kind=ButtonEventKind.SILENCE_TOGGLE, hold_ms=hold_ms)
        return None
