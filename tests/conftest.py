"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json

import httpx
import pytest

from fandash.core.reconciler import GaugeReading, SubView
from fandash.models.status import StatusResult


class FakeTrendChart:
    """Records every update pushed by the history store."""

    def __init__(self, key: str) -> None:
        self.key = key
        self.updates: list[tuple[list[str], list[list[float]]]] = []

    def update(self, labels, series) -> None:
        self.updates.append((labels, series))


class FakeCardView:
    """In-memory card sink that records calls in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.cards: list[str] = []
        self.created: dict[str, StatusResult] = {}
        self.online: dict[str, bool] = {}
        self.readings: dict[str, GaugeReading] = {}
        self.errors: dict[str, str] = {}
        self.sub_views: dict[str, SubView] = {}
        self.charts_created: list[FakeTrendChart] = []

    def create_card(self, result: StatusResult, index: int) -> None:
        self.calls.append(("create", result.key, index))
        if index < len(self.cards):
            self.cards.insert(index, result.key)
        else:
            self.cards.append(result.key)
        self.online[result.key] = result.online
        self.sub_views[result.key] = SubView.OVERVIEW
        self.created[result.key] = result

    def destroy_card(self, key: str) -> None:
        self.calls.append(("destroy", key))
        self.cards.remove(key)
        self.online.pop(key, None)
        self.sub_views.pop(key, None)

    def patch_gauges(self, key: str, reading: GaugeReading) -> None:
        self.calls.append(("patch", key))
        self.readings[key] = reading

    def set_error(self, key: str, message: str) -> None:
        self.calls.append(("error", key, message))
        self.errors[key] = message

    def show_sub_view(self, key: str, view: SubView) -> None:
        self.calls.append(("sub_view", key, view))
        self.sub_views[key] = view

    def create_trend_chart(self, key: str):
        if key not in self.cards or not self.online.get(key):
            return None
        chart = FakeTrendChart(key)
        self.charts_created.append(chart)
        return chart

    def actions(self, key: str) -> list[str]:
        return [c[0] for c in self.calls if c[1] == key]


class FakeManagementServer:
    """Stateful stand-in for the fleet management endpoint."""

    def __init__(self, devices: list[dict] | None = None) -> None:
        self.devices: list[dict] = list(devices or [])
        self.requests: list[tuple[str, dict | None]] = []
        self.fail: set[str] = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.requests.append((path, body))
        if path in self.fail:
            return httpx.Response(500)
        if path == "/get_pi_list":
            return httpx.Response(200, json=self.devices)
        if path == "/add_pi":
            if any(d["ip"] == body["ip"] for d in self.devices):
                return httpx.Response(409, json={"error": "exists"})
            self.devices.append(body)
            return httpx.Response(200, json={"ok": True})
        if path == "/edit_pi":
            for i, d in enumerate(self.devices):
                if d["ip"] == body["originalIp"]:
                    self.devices[i] = {k: body[k] for k in ("name", "ip", "port")}
            return httpx.Response(200, json={"ok": True})
        if path == "/delete_pi":
            self.devices = [d for d in self.devices if d["ip"] != body["ip"]]
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def card_view() -> FakeCardView:
    return FakeCardView()


@pytest.fixture
def management_server() -> FakeManagementServer:
    return FakeManagementServer([
        {"name": "Pi 1", "ip": "192.168.1.101", "port": 5000},
        {"name": "Pi 2", "ip": "192.168.1.102", "port": 5000},
    ])
