"""Unit tests for fandash.models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from fandash.models.device import Device, device_key
from fandash.models.status import UNAVAILABLE, StatusResult, StatusSample


class TestDevice:
    def test_key_derived_from_address(self):
        device = Device(name="Pi", address="192.168.1.5", port=5000)
        assert device.key == "192-168-1-5"
        assert device_key("10.0.0.1") == "10-0-0-1"

    def test_accepts_wire_field_name(self):
        device = Device.model_validate({"name": "Pi", "ip": "10.0.0.1", "port": 5001})
        assert device.address == "10.0.0.1"

    def test_to_wire_uses_ip(self):
        device = Device(name="Pi", address="10.0.0.1", port=5001)
        assert device.to_wire() == {"name": "Pi", "ip": "10.0.0.1", "port": 5001}

    def test_endpoint(self):
        assert Device(name="Pi", address="10.0.0.1", port=5001).endpoint == "10.0.0.1:5001"

    @pytest.mark.parametrize("port", [1023, 65536, 0])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValidationError):
            Device(name="Pi", address="10.0.0.1", port=port)

    @pytest.mark.parametrize("port", [1024, 65535])
    def test_port_bounds_inclusive(self, port):
        assert Device(name="Pi", address="10.0.0.1", port=port).port == port

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Device(name="", address="10.0.0.1", port=5000)


class TestStatusSample:
    def test_from_payload(self):
        ts = datetime(2024, 1, 1, 8, 30, 5)
        sample = StatusSample.from_payload(
            {"temperature": 51.2, "speed": 40, "cpu": 12.5, "memory": 33.0}, ts,
        )
        assert sample.temperature == 51.2
        assert sample.speed == 40
        assert sample.label == "08:30:05"

    def test_speed_truncated_to_int(self):
        sample = StatusSample.from_payload(
            {"temperature": 40, "speed": 55.7, "cpu": 1, "memory": 1},
        )
        assert sample.speed == 55

    def test_numeric_strings_coerced(self):
        sample = StatusSample.from_payload(
            {"temperature": "48.5", "speed": "30", "cpu": "10", "memory": "20"},
        )
        assert sample.temperature == 48.5
        assert sample.speed == 30

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            StatusSample.from_payload({"temperature": 40, "speed": 10, "cpu": 1})

    def test_non_numeric_speed_rejected(self):
        with pytest.raises(ValidationError):
            StatusSample.from_payload(
                {"temperature": 40, "speed": "fast", "cpu": 1, "memory": 1},
            )


class TestStatusResult:
    def test_unavailable(self):
        device = Device(name="Pi", address="10.0.0.1", port=5000)
        result = StatusResult.unavailable(device)
        assert not result.online
        assert result.error == UNAVAILABLE
        assert result.key == "10-0-0-1"

    def test_ok(self):
        device = Device(name="Pi", address="10.0.0.1", port=5000)
        sample = StatusSample(temperature=1, speed=2, cpu=3, memory=4)
        result = StatusResult.ok(device, sample)
        assert result.online
        assert result.sample == sample


class TestNonFiniteValues:
    @pytest.mark.parametrize("field,value", [
        ("speed", float("inf")),
        ("speed", "nan"),
        ("temperature", float("inf")),
        ("cpu", float("nan")),
    ])
    def test_non_finite_rejected(self, field, value):
        payload = {"temperature": 40, "speed": 10, "cpu": 1, "memory": 1, field: value}
        with pytest.raises(ValidationError):
            StatusSample.from_payload(payload)
