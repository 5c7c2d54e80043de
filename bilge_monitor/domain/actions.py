"""Action — what one state-machine call asks the outside world to do.

Actions are produced, handed to the output sinks and forgotten.  Whether a
sink manages to deliver them is never reported back to the core.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from bilge_monitor.domain.enums import DeviceState, NotificationKind


class Notification(BaseModel):
    """A message for the boat owner."""

    kind: NotificationKind
    text: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class Action(BaseModel):
    """Side effects requested by a single update or silence toggle."""

    state_changed: Optional[DeviceState] = Field(
        None, description="The new state, when a transition happened this tick"
    )
    horn_command: Optional[bool] = Field(
        None, description="New horn line level, when it must change"
    )
    notification: Optional[Notification] = None

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return (
            self.state_changed is None
            and self.horn_command is None
            and self.notification is None
        )


NO_ACTION = Action()
