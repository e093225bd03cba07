"""Telemetry sample and per-device poll result models."""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fandash.models.device import Device

UNAVAILABLE = "Unavailable"


class StatusSample(BaseModel):
    """One polled telemetry snapshot from a device status endpoint."""
    model_config = ConfigDict(allow_inf_nan=False)

    timestamp: datetime = Field(default_factory=datetime.now)
    temperature: float
    speed: int = Field(description="Fan speed, percent")
    cpu: float = Field(description="CPU load, percent")
    memory: float = Field(description="Memory usage, percent")

    @field_validator("speed", mode="before")
    @classmethod
    def _truncate_speed(cls, value):
        # Devices may report a float duty cycle; the dashboard shows whole percent.
        if isinstance(value, bool):
            raise ValueError("speed must be numeric")
        if isinstance(value, (int, float, str)):
            try:
                number = float(value)
            except OverflowError:
                raise ValueError("speed out of range") from None
            if not math.isfinite(number):
                raise ValueError("speed must be finite")
            return int(number)
        return value

    @classmethod
    def from_payload(cls, payload: dict, timestamp: datetime | None = None) -> StatusSample:
        """Build a sample from the ``/status`` JSON body."""
        data = {k: payload.get(k) for k in ("temperature", "speed", "cpu", "memory")}
        if timestamp is not None:
            data["timestamp"] = timestamp
        return cls(**data)

    @property
    def label(self) -> str:
        """Wall-clock label used on the trend chart x axis."""
        return self.timestamp.strftime("%H:%M:%S")


class StatusResult(BaseModel):
    """Outcome of polling one device: either a sample or an error text."""

    device: Device
    sample: StatusSample | None = None
    error: str | None = None

    @property
    def online(self) -> bool:
        return self.error is None

    @property
    def key(self) -> str:
        return self.device.key

    @classmethod
    def ok(cls, device: Device, sample: StatusSample) -> StatusResult:
        return cls(device=device, sample=sample)

    @classmethod
    def unavailable(cls, device: Device, error: str = UNAVAILABLE) -> StatusResult:
        return cls(device=device, error=error)
