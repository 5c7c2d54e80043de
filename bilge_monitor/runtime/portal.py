"""Configuration portal contract.

The real portal (access point, captive DNS, web pages) lives outside the
core.  The state machine only needs to know whether a session is live, and
the runtime needs to be able to start one when the device enters CONFIG.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from bilge_monitor.foundation.clock import Clock

logger = logging.getLogger(__name__)

SESSION_TIMEOUT_MS = 240_000


class ConfigPortal(Protocol):
    def is_session_active(self) -> bool:
        ...

    def start_session(self) -> None:
        ...


class TimedPortal:
    """Portal stand-in whose session ends after an idle timeout.

    ``touch()`` marks operator activity and pushes the timeout back;
    ``stop_session()`` ends the session at once.
    """

    def __init__(self, clock: Clock, timeout_ms: int = SESSION_TIMEOUT_MS) -> None:
        self._clock = clock
        self._timeout_ms = timeout_ms
        self._last_activity_ms: Optional[int] = None

    def start_session(self) -> None:
        self._last_activity_ms = self._clock.now_ms()
        logger.info("Configuration session started (timeout=%d ms)", self._timeout_ms)

    def touch(self) -> None:
        if self._last_activity_ms is not None:
            self._last_activity_ms = self._clock.now_ms()

    def stop_session(self) -> None:
        if self._last_activity_ms is not None:
            logger.info("Configuration session stopped")
        self._last_activity_ms = None

    def is_session_active(self) -> bool:
        if self._last_activity_ms is None:
            return False
        if self._clock.now_ms() - self._last_activity_ms >= self._timeout_ms:
            logger.info("Configuration session timed out")
            self._last_activity_ms = None
            return False
        return True
