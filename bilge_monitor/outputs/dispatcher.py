"""ActionDispatcher — fans state-machine actions out to the output sinks.

Delivery is fire-and-forget.  A sink that returns False or raises is logged
and counted, and the remaining sinks still get their turn.  Nothing about
delivery ever flows back to the state machine.
"""

from __future__ import annotations

import logging

from bilge_monitor.domain.actions import Action
from bilge_monitor.outputs.base import HornDriver, IndicatorDriver, NotificationSink
from bilge_monitor.outputs.indicator import pattern_for_state

logger = logging.getLogger(__name__)


class SinkStats:
    """Per-sink delivery counters for observability."""

    __slots__ = ("sink_name", "delivered_count", "failed_count")

    def __init__(self, sink_name: str) -> None:
        self.sink_name = sink_name
        self.delivered_count: int = 0
        self.failed_count: int = 0

    def to_dict(self) -> dict:
        return {
            "sink_name": self.sink_name,
            "delivered_count": self.delivered_count,
            "failed_count": self.failed_count,
        }


class ActionDispatcher:
    """Routes Actions to the horn, the LED and every notification sink.

    Usage:
        dispatcher = ActionDispatcher(horn=gpio_horn, indicator=led)
        dispatcher.register(SmsSink(...))
        dispatcher.register(DiscordSink(...))

        dispatcher.dispatch(action)
    """

    def __init__(
        self,
        horn: HornDriver | None = None,
        indicator: IndicatorDriver | None = None,
    ) -> None:
        self._horn = horn
        self._indicator = indicator
        self._sinks: list[NotificationSink] = []
        self._stats: dict[str, SinkStats] = {}

    def register(self, sink: NotificationSink) -> None:
        """Add a notification transport."""
        self._sinks.append(sink)
        self._stats[sink.sink_name] = SinkStats(sink.sink_name)
        logger.info("Registered notification sink: %s", sink.sink_name)

    def dispatch(self, action: Action) -> None:
        if action.is_empty:
            return

        if action.state_changed is not None and self._indicator is not None:
            self._indicator.show(pattern_for_state(action.state_changed))

        if action.horn_command is not None and self._horn is not None:
            self._horn.set(action.horn_command)

        if action.notification is not None:
            self._broadcast(action.notification.text)

    def refresh(self, now_ms: int) -> None:
        """Let the indicator advance its blink timing for this tick."""
        if self._indicator is not None:
            self._indicator.refresh(now_ms)

    def _broadcast(self, text: str) -> None:
        for sink in self._sinks:
            stats = self._stats[sink.sink_name]
            try:
                delivered = sink.send(text)
            except Exception as exc:
                stats.failed_count += 1
                logger.warning("Sink '%s' raised while sending: %s", sink.sink_name, exc)
                continue
            if delivered:
                stats.delivered_count += 1
            else:
                stats.failed_count += 1
                logger.warning("Sink '%s' failed to send message", sink.sink_name)

    @property
    def sink_names(self) -> list[str]:
        """Registered sink names in registration order."""
        return [s.sink_name for s in self._sinks]

    @property
    def stats(self) -> list[dict]:
        return [s.to_dict() for s in self._stats.values()]

    @property
    def total_failed(self) -> int:
        return sum(s.failed_count for s in self._stats.values())
