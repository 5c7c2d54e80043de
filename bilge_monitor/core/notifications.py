"""Notification throttler and message wording.

While the device is in EMERGENCY an alert is due every ``notif_interval_ms``.
The throttle timestamp advances whenever an alert is due, even when the
owner has silenced alerts, so lifting the silence never releases a burst of
queued messages.
"""

from __future__ import annotations

import logging
from typing import Optional

from bilge_monitor.domain.actions import Notification
from bilge_monitor.domain.context import MonitorContext
from bilge_monitor.domain.enums import NotificationKind

logger = logging.getLogger(__name__)

URGENT_ALERT_TEMPLATE = "Boat Monitor URGENT Alert: Critical Level {level:.2f} cm - HORN ACTIVATED!"
STANDARD_ALERT_TEMPLATE = "Boat Monitor Alert: Emergency Level {level:.2f} cm"
SILENCED_TEXT = "Boat Monitor: Emergency alerts have been temporarily silenced"
UNSILENCED_TEXT = "Boat Monitor: Emergency alerts have been re-enabled"

# Longest message the SMS and Discord transports are handed
MAX_MESSAGE_CHARS = 255


def has_elapsed(now_ms: int, since_ms: Optional[int], period_ms: int) -> bool:
    """True when *period_ms* has passed since *since_ms* (None means never)."""
    if since_ms is None:
        return True
    return now_ms - since_ms >= period_ms


def format_alert(level_cm: float, urgent: bool) -> str:
    """Render an alert, cut to MAX_MESSAGE_CHARS so any level fits a message."""
    template = URGENT_ALERT_TEMPLATE if urgent else STANDARD_ALERT_TEMPLATE
    return template.format(level=level_cm)[:MAX_MESSAGE_CHARS]


def alert_due(ctx: MonitorContext, now_ms: int) -> bool:
    """True when the throttle window has elapsed, regardless of silence."""
    return has_elapsed(now_ms, ctx.last_notification_ms, ctx.thresholds.notif_interval_ms)


def run_throttler(ctx: MonitorContext, now_ms: int) -> Notification | None:
    """Advance the alert throttle for one EMERGENCY tick.

    Returns the alert to send, or None when nothing is due or alerts are
    silenced.
    """
    if not alert_due(ctx, now_ms):
        return None

    ctx.last_notification_ms = now_ms

    if ctx.notifications_silenced:
        logger.info("Alert due but notifications are silenced; skipping")
        return None

    text = format_alert(ctx.last_level_cm, urgent=ctx.tier2_active)
    logger.warning("Sending alert: %s", text)
    return Notification(kind=NotificationKind.ALERT, text=text)
