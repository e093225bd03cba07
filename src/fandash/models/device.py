"""Monitored device model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_PORT = 1024
MAX_PORT = 65535


def device_key(address: str) -> str:
    """Derive the stable card/history key for an address (dots become dashes)."""
    return address.replace(".", "-")


class Device(BaseModel):
    """A monitored device as stored by the fleet management endpoint.

    The wire format names the address field ``ip``; ``address`` is accepted
    too and used in Python code.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    address: str = Field(alias="ip", min_length=1)
    port: int = Field(ge=MIN_PORT, le=MAX_PORT)

    @property
    def key(self) -> str:
        return device_key(self.address)

    @property
    def endpoint(self) -> str:
        return f"{self.address}:{self.port}"

    def to_wire(self) -> dict:
        """Serialize using the management endpoint field names."""
        return self.model_dump(by_alias=True)
