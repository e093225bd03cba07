"""Unit tests for the device registry and management client."""

from __future__ import annotations

import asyncio

import pytest

from fandash.core.management import ManagementClient
from fandash.core.registry import (
    EDIT_FIELDS_MESSAGE,
    PORT_MESSAGE,
    DeviceRegistry,
    validate_edited_device,
    validate_new_device,
)
from fandash.exceptions import DeviceValidationError, DuplicateDeviceError, ManagementError

_MANAGER = "http://manager.local:5000"


def _registry(server, reachable: bool | None = True) -> DeviceRegistry:
    client = ManagementClient(_MANAGER, client=server.client())
    prober = None
    if reachable is not None:
        async def prober(address, port):
            return reachable
    return DeviceRegistry(client, prober=prober)


def _loaded(server, reachable: bool | None = True) -> DeviceRegistry:
    registry = _registry(server, reachable)
    asyncio.run(registry.load())
    return registry


class TestValidateNewDevice:
    def test_valid(self):
        device = validate_new_device(" Pi 3 ", "10.0.0.3", "5001")
        assert device.name == "Pi 3"
        assert device.port == 5001

    @pytest.mark.parametrize("name,address,port,message", [
        ("", "", "", "Please enter name, IP, and port."),
        ("", "10.0.0.3", "5001", "Please enter name."),
        ("Pi", "", "", "Please enter IP and port."),
        ("Pi", "10.0.0.3", None, "Please enter port."),
    ])
    def test_missing_fields(self, name, address, port, message):
        with pytest.raises(DeviceValidationError) as excinfo:
            validate_new_device(name, address, port)
        assert str(excinfo.value) == message

    @pytest.mark.parametrize("port", ["80", "70000", "abc", "1023"])
    def test_bad_port(self, port):
        with pytest.raises(DeviceValidationError) as excinfo:
            validate_new_device("Pi", "10.0.0.3", port)
        assert str(excinfo.value) == PORT_MESSAGE


class TestValidateEditedDevice:
    def test_port_checked_first(self):
        with pytest.raises(DeviceValidationError) as excinfo:
            validate_edited_device("", "", "12")
        assert str(excinfo.value) == PORT_MESSAGE

    def test_blank_fields(self):
        with pytest.raises(DeviceValidationError) as excinfo:
            validate_edited_device("Pi", "  ", 5000)
        assert str(excinfo.value) == EDIT_FIELDS_MESSAGE


class TestLoad:
    def test_keeps_endpoint_order(self, management_server):
        registry = _loaded(management_server)
        assert [d.name for d in registry.devices] == ["Pi 1", "Pi 2"]
        assert registry.index_of("192-168-1-102") == 1
        assert registry.index_of("10-0-0-9") == -1
        assert registry.get("192-168-1-101").port == 5000

    def test_invalid_entries_skipped(self, management_server):
        management_server.devices.append({"name": "bad", "ip": "10.0.0.9", "port": 80})
        registry = _loaded(management_server)
        assert len(registry) == 2

    def test_failure_keeps_current_list(self, management_server):
        registry = _loaded(management_server)
        management_server.fail.add("/get_pi_list")
        with pytest.raises(ManagementError):
            asyncio.run(registry.load())
        assert len(registry) == 2

    def test_changed_listener(self, management_server):
        registry = _registry(management_server)
        seen = []
        registry.on_changed.append(seen.append)
        asyncio.run(registry.load())
        assert [len(devices) for devices in seen] == [2]


class TestAdd:
    def test_add_reloads(self, management_server):
        registry = _loaded(management_server)
        outcome = asyncio.run(registry.add("Pi 3", "192.168.1.103", "5000"))
        assert outcome.reachable
        assert [d.name for d in registry.devices] == ["Pi 1", "Pi 2", "Pi 3"]
        assert ("/add_pi", {"name": "Pi 3", "ip": "192.168.1.103", "port": 5000}) in (
            management_server.requests
        )

    def test_invalid_input_sends_nothing(self, management_server):
        registry = _loaded(management_server)
        management_server.requests.clear()
        with pytest.raises(DeviceValidationError):
            asyncio.run(registry.add("Pi 3", "192.168.1.103", "80"))
        assert management_server.requests == []

    def test_duplicate_leaves_registry(self, management_server):
        registry = _loaded(management_server)
        with pytest.raises(DuplicateDeviceError):
            asyncio.run(registry.add("Again", "192.168.1.101", "5000"))
        assert len(registry) == 2

    def test_unreachable_device_still_added(self, management_server):
        registry = _loaded(management_server, reachable=False)
        outcome = asyncio.run(registry.add("Pi 3", "192.168.1.103", "5000"))
        assert not outcome.reachable
        assert len(registry) == 3
        assert registry.take_recently_offline() == {"192-168-1-103"}
        assert registry.take_recently_offline() == set()

    def test_before_probe_called_after_validation(self, management_server):
        registry = _loaded(management_server)
        calls = []
        asyncio.run(registry.add("Pi 3", "192.168.1.103", "5000",
                                 before_probe=lambda: calls.append("probe")))
        assert calls == ["probe"]

    def test_without_prober(self, management_server):
        registry = _loaded(management_server, reachable=None)
        calls = []
        outcome = asyncio.run(registry.add("Pi 3", "192.168.1.103", "5000",
                                           before_probe=lambda: calls.append("probe")))
        assert calls == []
        assert not outcome.reachable

    def test_reload_failure_applies_locally(self, management_server):
        registry = _loaded(management_server)
        management_server.fail.add("/get_pi_list")
        asyncio.run(registry.add("Pi 3", "192.168.1.103", "5000"))
        assert [d.name for d in registry.devices] == ["Pi 1", "Pi 2", "Pi 3"]

    def test_endpoint_failure(self, management_server):
        registry = _loaded(management_server)
        management_server.fail.add("/add_pi")
        with pytest.raises(ManagementError) as excinfo:
            asyncio.run(registry.add("Pi 3", "192.168.1.103", "5000"))
        assert excinfo.value.action == "add"
        assert excinfo.value.status_code == 500
        assert len(registry) == 2


class TestEdit:
    def test_rename_notifies_with_same_key(self, management_server):
        registry = _loaded(management_server)
        edited = []
        registry.on_edited.append(lambda old, new: edited.append((old, new)))
        asyncio.run(registry.edit("192.168.1.101", "Kitchen", "192.168.1.101", "5000"))
        assert registry.devices[0].name == "Kitchen"
        assert edited == [("192-168-1-101", "192-168-1-101")]

    def test_address_change_rekeys(self, management_server):
        registry = _loaded(management_server)
        edited = []
        registry.on_edited.append(lambda old, new: edited.append((old, new)))
        asyncio.run(registry.edit("192.168.1.101", "Pi 1", "192.168.1.150", "5000"))
        assert edited == [("192-168-1-101", "192-168-1-150")]
        assert registry.index_of("192-168-1-150") == 0

    def test_failed_edit_does_not_notify(self, management_server):
        registry = _loaded(management_server)
        management_server.fail.add("/edit_pi")
        edited = []
        registry.on_edited.append(lambda old, new: edited.append((old, new)))
        with pytest.raises(ManagementError):
            asyncio.run(registry.edit("192.168.1.101", "Kitchen", "192.168.1.101", "5000"))
        assert edited == []
        assert registry.devices[0].name == "Pi 1"

    def test_edit_body(self, management_server):
        registry = _loaded(management_server)
        asyncio.run(registry.edit("192.168.1.102", "Pi 2", "192.168.1.102", 6000))
        assert management_server.requests[-2] == (
            "/edit_pi",
            {"originalIp": "192.168.1.102", "name": "Pi 2", "ip": "192.168.1.102", "port": 6000},
        )

    def test_reload_failure_applies_locally(self, management_server):
        registry = _loaded(management_server)
        management_server.fail.add("/get_pi_list")
        asyncio.run(registry.edit("192.168.1.102", "Pi 2", "192.168.1.120", "5000"))
        assert registry.devices[1].address == "192.168.1.120"


class TestRemove:
    def test_remove_notifies(self, management_server):
        registry = _loaded(management_server)
        removed = []
        registry.on_removed.append(removed.append)
        asyncio.run(registry.remove("192.168.1.101"))
        assert removed == ["192-168-1-101"]
        assert [d.name for d in registry.devices] == ["Pi 2"]

    def test_failure_keeps_device(self, management_server):
        registry = _loaded(management_server)
        management_server.fail.add("/delete_pi")
        removed = []
        registry.on_removed.append(removed.append)
        with pytest.raises(ManagementError):
            asyncio.run(registry.remove("192.168.1.101"))
        assert removed == []
        assert len(registry) == 2


class TestManagementClient:
    def test_list_requires_array(self, management_server):
        management_server.devices = {"not": "a list"}
        client = ManagementClient(_MANAGER, client=management_server.client())
        with pytest.raises(ManagementError, match="expected a JSON array"):
            asyncio.run(client.list_devices())

    def test_base_url_trailing_slash(self, management_server):
        client = ManagementClient(_MANAGER + "/", client=management_server.client())
        devices = asyncio.run(client.list_devices())
        assert len(devices) == 2
