"""SensorReading — the one value the water-level sensor hands the core per tick.

Calibration, smoothing and ADC details stay inside the sensor driver.  The
core only learns whether the reading can be trusted and how deep the water
is.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SensorReading(BaseModel):
    """A single water-level observation."""

    valid: bool = Field(..., description="False when the driver does not trust this sample")
    level_cm: float = Field(0.0, description="Water depth above the sensor zero point")

    model_config = {"frozen": True}

    @classmethod
    def invalid(cls) -> SensorReading:
        """Reading reported when the sensor cannot produce a trustworthy sample."""
        return cls(valid=False, level_cm=0.0)

    def __str__(self) -> str:
        status = "ok" if self.valid else "INVALID"
        return f"{self.level_cm:.2f} cm ({status})"
