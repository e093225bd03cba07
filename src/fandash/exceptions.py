"""Exception hierarchy for dashboard and fleet-management failures."""

from __future__ import annotations


class FanDashError(Exception):
    """Base exception for all fandash errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ConfigError(FanDashError):
    """Configuration value is missing or invalid."""


class DeviceValidationError(FanDashError):
    """Device form input failed client-side validation; nothing was sent."""


class DeviceUnavailableError(FanDashError):
    """A device status endpoint could not be reached or returned bad data."""


class ManagementError(FanDashError):
    """A call to the fleet management endpoint failed."""

    def __init__(
        self, message: str, action: str, status_code: int | None = None,
    ) -> None:
        self.action = action
        super().__init__(message, status_code=status_code)


class DuplicateDeviceError(ManagementError):
    """The management endpoint already has a device with this address."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(
            f"add: address {address} already registered",
            action="add",
            status_code=409,
        )


def check_response(status_code: int, action: str) -> None:
    """Raise the matching ManagementError for a non-success HTTP status.

    Args:
        status_code: HTTP status returned by the management endpoint.
        action: Name of the management action, used in the error message.

    Raises:
        ManagementError: If the status is not 2xx.
    """
    if 200 <= status_code < 300:
        return
    raise ManagementError(
        f"{action}: HTTP {status_code}", action=action, status_code=status_code,
    )
