"""Pydantic data models for fandash."""

from fandash.models.device import MAX_PORT, MIN_PORT, Device, device_key
from fandash.models.status import UNAVAILABLE, StatusResult, StatusSample

__all__ = [
    "MAX_PORT",
    "MIN_PORT",
    "UNAVAILABLE",
    "Device",
    "StatusResult",
    "StatusSample",
    "device_key",
]
