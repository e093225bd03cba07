"""Authoritative device list, synchronised with the management endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

from pydantic import ValidationError

from fandash.core.management import ManagementClient
from fandash.exceptions import DeviceValidationError, ManagementError
from fandash.models.device import MAX_PORT, MIN_PORT, Device, device_key
from fandash.utils.logging import get_logger

logger = get_logger(__name__)

PORT_MESSAGE = f"Port must be a number between {MIN_PORT} and {MAX_PORT}."
EDIT_FIELDS_MESSAGE = "Both fields are required to save."

Prober = Callable[[str, int], Awaitable[bool]]


@dataclass(frozen=True)
class RegistryOutcome:
    """Result of a successful add or edit."""

    device: Device
    reachable: bool


def _join_fields(fields: list[str]) -> str:
    if len(fields) == 1:
        return fields[0]
    if len(fields) == 2:
        return f"{fields[0]} and {fields[1]}"
    return f"{', '.join(fields[:-1])}, and {fields[-1]}"


def _parse_port(port: str | int | None) -> int:
    try:
        value = int(str(port).strip())
    except (TypeError, ValueError):
        raise DeviceValidationError(PORT_MESSAGE) from None
    if not MIN_PORT <= value <= MAX_PORT:
        raise DeviceValidationError(PORT_MESSAGE)
    return value


def _build(name: str, address: str, port: int) -> Device:
    try:
        return Device(name=name, address=address, port=port)
    except ValidationError as exc:
        raise DeviceValidationError(f"Invalid device: {exc.errors()[0]['msg']}") from exc


def validate_new_device(name: str | None, address: str | None, port: str | int | None) -> Device:
    """Validate add-form input.

    Raises:
        DeviceValidationError: With the operator-facing message.
    """
    name = (name or "").strip()
    address = (address or "").strip()
    port_text = "" if port is None else str(port).strip()

    missing = [
        label
        for label, value in (("name", name), ("IP", address), ("port", port_text))
        if not value
    ]
    if missing:
        raise DeviceValidationError(f"Please enter {_join_fields(missing)}.")
    return _build(name, address, _parse_port(port_text))


def validate_edited_device(name: str | None, address: str | None, port: str | int | None) -> Device:
    """Validate edit-in-place input; the port is checked first."""
    port_value = _parse_port(port)
    name = (name or "").strip()
    address = (address or "").strip()
    if not name or not address:
        raise DeviceValidationError(EDIT_FIELDS_MESSAGE)
    return _build(name, address, port_value)


class DeviceRegistry:
    """Holds the monitored devices in management-endpoint order.

    Mutations go to the management endpoint first; the in-memory list only
    changes after the endpoint confirms, by reloading from it.
    """

    def __init__(self, client: ManagementClient, prober: Prober | None = None) -> None:
        self._client = client
        self._prober = prober
        self._devices: list[Device] = []
        self.recently_offline: set[str] = set()
        self.on_changed: list[Callable[[list[Device]], None]] = []
        self.on_edited: list[Callable[[str, str], None]] = []
        self.on_removed: list[Callable[[str], None]] = []

    @property
    def devices(self) -> list[Device]:
        return list(self._devices)

    def __len__(self) -> int:
        return len(self._devices)

    def get(self, key: str) -> Device | None:
        for device in self._devices:
            if device.key == key:
                return device
        return None

    def index_of(self, key: str) -> int:
        """Registry position of *key*, or -1 if not registered."""
        for i, device in enumerate(self._devices):
            if device.key == key:
                return i
        return -1

    def _replace(self, devices: list[Device]) -> None:
        self._devices = list(devices)
        for callback in self.on_changed:
            callback(self.devices)

    async def load(self) -> list[Device]:
        """Replace the list with the management endpoint's copy.

        Raises:
            ManagementError: The list could not be fetched; the current
                list is left as is.
        """
        devices = await self._client.list_devices()
        self._replace(devices)
        logger.info("registry_loaded", count=len(devices))
        return self.devices

    async def _reload_after(self, action: str, fallback: Callable[[], list[Device]]) -> None:
        try:
            await self.load()
        except ManagementError as exc:
            # The mutation itself succeeded, so mirror it locally.
            logger.warning("registry_reload_failed", action=action, error=str(exc))
            self._replace(fallback())

    async def _probe(self, device: Device, before_probe: Callable[[], None] | None) -> bool:
        if self._prober is None:
            return False
        if before_probe is not None:
            before_probe()
        reachable = await self._prober(device.address, device.port)
        logger.debug("registry_probe", key=device.key, reachable=reachable)
        return reachable

    async def add(
        self,
        name: str | None,
        address: str | None,
        port: str | int | None,
        before_probe: Callable[[], None] | None = None,
    ) -> RegistryOutcome:
        """Validate, probe and register a new device.

        *before_probe* is called once validation has passed, just before the
        reachability probe starts.

        Raises:
            DeviceValidationError: Input rejected before any request.
            DuplicateDeviceError: The address is already registered.
            ManagementError: The endpoint rejected or failed the request.
        """
        device = validate_new_device(name, address, port)
        reachable = await self._probe(device, before_probe)
        await self._client.add_device(device)
        logger.info("device_added", key=device.key, reachable=reachable)

        if not reachable:
            self.recently_offline.add(device.key)
        await self._reload_after("add", lambda: [*self._devices, device])
        return RegistryOutcome(device=device, reachable=reachable)

    async def edit(
        self,
        original_address: str,
        name: str | None,
        address: str | None,
        port: str | int | None,
        before_probe: Callable[[], None] | None = None,
    ) -> RegistryOutcome:
        """Validate, probe and submit changes to an existing device.

        Listeners in ``on_edited`` get the old and new key after every
        successful edit, equal when the address is unchanged.
        """
        device = validate_edited_device(name, address, port)
        reachable = await self._probe(device, before_probe)
        await self._client.edit_device(original_address, device)
        logger.info("device_edited", original=original_address, key=device.key,
                    reachable=reachable)

        old_key = device_key(original_address)
        for callback in self.on_edited:
            callback(old_key, device.key)
        if not reachable:
            self.recently_offline.add(device.key)

        def _local() -> list[Device]:
            return [device if d.key == old_key else d for d in self._devices]

        await self._reload_after("edit", _local)
        return RegistryOutcome(device=device, reachable=reachable)

    async def remove(self, address: str) -> None:
        """Delete a device and drop its card and history."""
        await self._client.delete_device(address)
        key = device_key(address)
        logger.info("device_removed", key=key)
        self.recently_offline.discard(key)
        for callback in self.on_removed:
            callback(key)
        await self._reload_after("delete", lambda: [d for d in self._devices if d.key != key])

    def take_recently_offline(self) -> set[str]:
        """Return and clear the keys flagged offline by the last add or edit."""
        keys, self.recently_offline = self.recently_offline, set()
        return keys
