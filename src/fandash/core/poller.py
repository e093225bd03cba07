"""Time-bounded status polling for individual devices."""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError

from fandash.exceptions import DeviceUnavailableError
from fandash.models.device import Device
from fandash.models.status import StatusResult, StatusSample
from fandash.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 2.0


def status_url(address: str, port: int) -> str:
    return f"http://{address}:{port}/status"


class StatusPoller:
    """Fetches ``/status`` from devices with a hard per-request timeout.

    Each request carries its own timeout, so a device that never answers
    only ever costs its own slot in a refresh pass.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout_s = timeout_s
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def _get_status(self, address: str, port: int) -> httpx.Response:
        # Total deadline for the request; the request is cancelled on expiry.
        request = self._client.get(
            status_url(address, port), timeout=httpx.Timeout(self.timeout_s),
        )
        try:
            return await asyncio.wait_for(request, self.timeout_s)
        except asyncio.TimeoutError as exc:
            raise httpx.TimeoutException(
                f"no response within {self.timeout_s}s"
            ) from exc

    async def read_sample(self, device: Device) -> StatusSample:
        """Fetch and parse one sample.

        Raises:
            DeviceUnavailableError: On timeout, transport failure, non-200
                status or a body that is not a valid status payload.
        """
        try:
            response = await self._get_status(device.address, device.port)
        except httpx.TimeoutException as exc:
            raise DeviceUnavailableError(f"{device.endpoint}: timed out") from exc
        except httpx.HTTPError as exc:
            raise DeviceUnavailableError(f"{device.endpoint}: {exc}") from exc

        if response.status_code != 200:
            raise DeviceUnavailableError(
                f"{device.endpoint}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise DeviceUnavailableError(f"{device.endpoint}: invalid JSON") from exc
        if not isinstance(payload, dict):
            raise DeviceUnavailableError(f"{device.endpoint}: unexpected payload")
        try:
            return StatusSample.from_payload(payload)
        except ValidationError as exc:
            raise DeviceUnavailableError(
                f"{device.endpoint}: malformed status ({exc.error_count()} errors)"
            ) from exc

    async def fetch_status(self, device: Device) -> StatusResult:
        """Poll one device. Never raises; failures become an error result."""
        try:
            sample = await self.read_sample(device)
        except DeviceUnavailableError as exc:
            logger.debug("device_unavailable", key=device.key, error=str(exc))
            return StatusResult.unavailable(device)
        return StatusResult.ok(device, sample)

    async def probe(self, address: str, port: int) -> bool:
        """Best-effort reachability check: True iff ``/status`` answers 200."""
        try:
            response = await self._get_status(address, port)
        except httpx.HTTPError as exc:
            logger.debug("probe_failed", address=address, port=port, error=str(exc))
            return False
        if response.status_code != 200:
            logger.debug("probe_not_ok", address=address, port=port,
                         status=response.status_code)
            return False
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
