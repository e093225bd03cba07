"""Operator-facing alert messages for fleet management actions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fandash.core.registry import RegistryOutcome
from fandash.exceptions import DeviceValidationError, DuplicateDeviceError, ManagementError

AUTO_DISMISS_S = 5.0


class AlertLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Alert:
    """A banner message. Persistent alerts stay until the operator closes them."""

    message: str
    level: AlertLevel = AlertLevel.SUCCESS
    persistent: bool = False

    @property
    def timeout_s(self) -> float | None:
        return None if self.persistent else AUTO_DISMISS_S


CHECKING = Alert("Checking device status...", AlertLevel.INFO, persistent=True)

_FAILURES: dict[str, str] = {
    "add": "Failed to add device due to an unexpected error.",
    "edit": "Error updating device.",
    "delete": "Could not delete device.",
    "list": "Could not load device list.",
}


def added(outcome: RegistryOutcome) -> Alert:
    if outcome.reachable:
        return Alert("Device added and reachable.", AlertLevel.SUCCESS)
    return Alert(
        "Device added but not reachable (offline or fan API unavailable).",
        AlertLevel.WARNING,
    )


def edited(outcome: RegistryOutcome) -> Alert:
    if outcome.reachable:
        return Alert("Device updated successfully and is reachable.", AlertLevel.SUCCESS)
    return Alert(
        "Device updated, but is not reachable (offline or fan API unavailable).",
        AlertLevel.WARNING,
        persistent=True,
    )


def failure(exc: Exception, action: str) -> Alert:
    """Map an exception raised by a registry action to its alert."""
    if isinstance(exc, DeviceValidationError):
        return Alert(str(exc), AlertLevel.WARNING, persistent=True)
    if isinstance(exc, DuplicateDeviceError):
        return Alert("That device IP already exists.", AlertLevel.DANGER, persistent=True)
    if isinstance(exc, ManagementError):
        action = exc.action
    return Alert(
        _FAILURES.get(action, f"Device {action} failed."), AlertLevel.DANGER, persistent=True,
    )
