"""Thresholds — the five operator tunables the core re-reads every tick.

``Thresholds`` is an immutable, validated snapshot.  ``LiveThresholds`` is
the small mutable holder an operator interface writes to; the state machine
only ever sees whole snapshots, so a half-applied update is impossible.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import BaseModel, Field, ValidationError, model_validator

from bilge_monitor.config import settings
from bilge_monitor.errors import ThresholdValidationError

logger = logging.getLogger(__name__)

# Usable range of the pressure sensor
MIN_LEVEL_CM = 0.0
MAX_LEVEL_CM = 100.0

MIN_NOTIF_INTERVAL_MS = 10_000
MAX_NOTIF_INTERVAL_MS = 86_400_000

MIN_HORN_PHASE_MS = 100
MAX_HORN_PHASE_MS = 60_000


class Thresholds(BaseModel):
    """Emergency levels and alarm timing."""

    tier1_level_cm: float = Field(
        30.0, ge=MIN_LEVEL_CM, le=MAX_LEVEL_CM,
        description="Level at which owner notifications start",
    )
    tier2_level_cm: float = Field(
        50.0, ge=MIN_LEVEL_CM, le=MAX_LEVEL_CM,
        description="Urgent level at which the horn sounds",
    )
    notif_interval_ms: int = Field(
        900_000, ge=MIN_NOTIF_INTERVAL_MS, le=MAX_NOTIF_INTERVAL_MS,
        description="Minimum gap between two alert messages",
    )
    horn_on_ms: int = Field(1000, ge=MIN_HORN_PHASE_MS, le=MAX_HORN_PHASE_MS)
    horn_off_ms: int = Field(1000, ge=MIN_HORN_PHASE_MS, le=MAX_HORN_PHASE_MS)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def tier2_above_tier1(self) -> Thresholds:
        if self.tier2_level_cm <= self.tier1_level_cm:
            raise ValueError(
                f"tier2_level_cm ({self.tier2_level_cm}) must be greater than "
                f"tier1_level_cm ({self.tier1_level_cm})"
            )
        return self

    @classmethod
    def from_settings(cls) -> Thresholds:
        """Boot-time defaults taken from the environment."""
        return cls(
            tier1_level_cm=settings.tier1_level_cm,
            tier2_level_cm=settings.tier2_level_cm,
            notif_interval_ms=settings.notif_interval_ms,
            horn_on_ms=settings.horn_on_ms,
            horn_off_ms=settings.horn_off_ms,
        )


class ThresholdProvider(Protocol):
    """Source of the live threshold snapshot."""

    def current(self) -> Thresholds:
        ...


class LiveThresholds:
    """Hot-reloadable threshold holder.

    Usage:
        live = LiveThresholds()
        live.update(tier1_level_cm=25.0)
        live.current().tier1_level_cm  # 25.0
    """

    def __init__(self, initial: Thresholds | None = None) -> None:
        self._current = initial or Thresholds.from_settings()

    def current(self) -> Thresholds:
        return self._current

    def update(self, **changes: Any) -> Thresholds:
        """Apply operator changes atomically.

        Raises:
            ThresholdValidationError: If a field is unknown or a value is
                out of range.  The previous snapshot stays in effect.
        """
        unknown = set(changes) - set(Thresholds.model_fields)
        if unknown:
            name = sorted(unknown)[0]
            raise ThresholdValidationError(name, "unknown threshold")

        merged = {**self._current.model_dump(), **changes}
        try:
            candidate = Thresholds.model_validate(merged)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or "thresholds"
            raise ThresholdValidationError(field, first["msg"]) from exc

        self._current = candidate
        logger.info("Thresholds updated: %s", changes)
        return candidate
