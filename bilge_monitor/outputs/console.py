"""Log-only output drivers for running without hardware."""

from __future__ import annotations

import logging

from bilge_monitor.domain.enums import BlinkPattern
from bilge_monitor.outputs.base import HornDriver, IndicatorDriver, NotificationSink
from bilge_monitor.outputs.indicator import BlinkSchedule

logger = logging.getLogger(__name__)


class LogNotificationSink(NotificationSink):
    def __init__(self, name: str = "log") -> None:
        self._name = name
        self.sent: list[str] = []

    @property
    def sink_name(self) -> str:
        return self._name

    def send(self, text: str) -> bool:
        self.sent.append(text)
        logger.info("[%s] %s", self._name, text)
        return True


class LogHorn(HornDriver):
    def __init__(self) -> None:
        self.on = False

    def set(self, on: bool) -> None:
        self.on = on
        logger.info("Horn line %s", "HIGH" if on else "LOW")


class LogIndicator(IndicatorDriver):
    """LED stand-in that runs the blink timing and logs level changes."""

    def __init__(self) -> None:
        self.pattern = BlinkPattern.OFF
        self._schedule = BlinkSchedule()

    @property
    def lit(self) -> bool:
        return self._schedule.lit

    def show(self, pattern: BlinkPattern) -> None:
        self.pattern = pattern
        logger.info("LED pattern -> %s", pattern.value)

    def refresh(self, now_ms: int) -> None:
        was_lit = self._schedule.lit
        self._schedule.set_pattern(self.pattern, now_ms)
        if self._schedule.update(now_ms) != was_lit:
            logger.debug("LED %s", "on" if self._schedule.lit else "off")
