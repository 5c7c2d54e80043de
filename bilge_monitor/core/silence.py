"""Silence toggle handler.

A qualifying long button hold flips ``notifications_silenced`` while the
device is in EMERGENCY.  Outside EMERGENCY the request is ignored without
touching the context.  The alert throttle timestamp is deliberately left
alone, so the first tick after unsilencing may alert straight away.
"""

from __future__ import annotations

import logging

from bilge_monitor.core.horn import force_horn_off
from bilge_monitor.core.notifications import SILENCED_TEXT, UNSILENCED_TEXT
from bilge_monitor.domain.actions import NO_ACTION, Action, Notification
from bilge_monitor.domain.context import MonitorContext
from bilge_monitor.domain.enums import NotificationKind

logger = logging.getLogger(__name__)


def handle_silence_toggle(ctx: MonitorContext) -> Action:
    if not ctx.in_emergency:
        logger.debug("Silence toggle ignored in %s", ctx.current_state)
        return NO_ACTION

    ctx.notifications_silenced = not ctx.notifications_silenced

    if ctx.notifications_silenced:
        logger.warning("Emergency notifications SILENCED by button hold")
        return Action(
            horn_command=force_horn_off(ctx),
            notification=Notification(kind=NotificationKind.SILENCE_CONFIRM, text=SILENCED_TEXT),
        )

    logger.warning("Emergency notifications RE-ENABLED by button hold")
    return Action(
        notification=Notification(kind=NotificationKind.UNSILENCE_CONFIRM, text=UNSILENCED_TEXT),
    )
