"""Abstract output sinks.

Sinks carry the state machine's actions into the physical world: the horn
GPIO line, the status LED and the owner's SMS / Discord channels.

Architectural rules:
    1. Sinks never call back into the state machine.
    2. A notification sink reports failure by returning False or raising;
       the dispatcher absorbs both.
    3. No sink may block for longer than one poll interval.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bilge_monitor.domain.enums import BlinkPattern


class NotificationSink(ABC):
    """Best-effort, fire-and-forget message transport."""

    @abstractmethod
    def send(self, text: str) -> bool:
        """Attempt delivery.  Returns True when the transport accepted it."""
        ...

    @property
    @abstractmethod
    def sink_name(self) -> str:
        """Human-readable name used in logs and stats."""
        ...


class HornDriver(ABC):
    """The alarm output line."""

    @abstractmethod
    def set(self, on: bool) -> None:
        ...


class IndicatorDriver(ABC):
    """The status LED."""

    @abstractmethod
    def show(self, pattern: BlinkPattern) -> None:
        ...

    def refresh(self, now_ms: int) -> None:
        """Advance blink timing.  Called once per poll tick; no-op by default."""
