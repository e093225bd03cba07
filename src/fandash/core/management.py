"""HTTP client for the fleet management endpoint."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from fandash.exceptions import DuplicateDeviceError, ManagementError, check_response
from fandash.models.device import Device
from fandash.utils.logging import get_logger

logger = get_logger(__name__)


class ManagementClient:
    """Wraps ``/get_pi_list``, ``/add_pi``, ``/edit_pi`` and ``/delete_pi``."""

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def _request(self, action: str, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("management_request_failed", action=action, url=url, error=str(exc))
            raise ManagementError(f"{action}: {exc}", action=action) from exc
        return response

    async def list_devices(self) -> list[Device]:
        """Fetch the registered device list.

        Entries that fail validation are skipped and logged.
        """
        response = await self._request("list", "GET", "/get_pi_list")
        check_response(response.status_code, "list")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ManagementError("list: invalid JSON", action="list") from exc
        if not isinstance(payload, list):
            raise ManagementError("list: expected a JSON array", action="list")

        devices: list[Device] = []
        for entry in payload:
            try:
                devices.append(Device.model_validate(entry))
            except ValidationError:
                logger.warning("management_entry_invalid", entry=entry)
        return devices

    async def add_device(self, device: Device) -> None:
        """Register a device.

        Raises:
            DuplicateDeviceError: The address is already registered (HTTP 409).
            ManagementError: Any other failure.
        """
        response = await self._request("add", "POST", "/add_pi", json=device.to_wire())
        if response.status_code == 409:
            raise DuplicateDeviceError(device.address)
        check_response(response.status_code, "add")

    async def edit_device(self, original_address: str, device: Device) -> None:
        body = {"originalIp": original_address, **device.to_wire()}
        response = await self._request("edit", "POST", "/edit_pi", json=body)
        check_response(response.status_code, "edit")

    async def delete_device(self, address: str) -> None:
        response = await self._request("delete", "POST", "/delete_pi", json={"ip": address})
        check_response(response.status_code, "delete")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
