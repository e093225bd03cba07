"""Device management dialog: add form plus an editable device list."""

from __future__ import annotations

from typing import Awaitable, Callable

from nicegui import ui

from fandash.core import alerts
from fandash.core.address import AddressInputMask
from fandash.core.editing import EditCoordinator
from fandash.core.reconciler import CardReconciler, CardState
from fandash.core.registry import DeviceRegistry
from fandash.exceptions import FanDashError
from fandash.models.device import MAX_PORT, MIN_PORT, Device
from fandash.ui.components.alerts import AlertBanner
from fandash.ui.theme import COLORS
from fandash.utils.logging import get_logger

logger = get_logger(__name__)

_FLAGGED_STYLE = "background: #fff3cd; color: #212529"
_NORMAL_STYLE = f"background: {COLORS['bg_tertiary']}; color: {COLORS['text_primary']}"


def masked_address_input(label: str, value: str = "") -> tuple[ui.input, AddressInputMask]:
    """Address input that live-formats dotted quads as the operator types."""
    mask = AddressInputMask(value)
    field = ui.input(label, value=value).props("dense outlined")

    def _on_change(e) -> None:
        formatted = mask.apply(e.value or "")
        if formatted != e.value:
            field.set_value(formatted)

    field.on_value_change(_on_change)
    return field, mask


def _port_text(value) -> str:
    return "" if value is None else str(int(value))


class DeviceManager:
    """Builds the management dialog and runs add/edit/remove actions."""

    def __init__(
        self,
        registry: DeviceRegistry,
        reconciler: CardReconciler,
        refresh: Callable[[], Awaitable[object]],
    ) -> None:
        self._registry = registry
        self._reconciler = reconciler
        self._refresh = refresh
        self._edits = EditCoordinator()

        with ui.dialog() as self.dialog, ui.card().classes("w-full").style("max-width: 720px"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Manage Devices").classes("text-h6")
                ui.button(icon="close", on_click=self.dialog.close).props("flat round dense")

            self.banner = AlertBanner()

            with ui.row().classes("w-full items-end gap-2"):
                self.name_input = ui.input("Name").props("dense outlined").classes("flex-grow")
                self.address_input, self._address_mask = masked_address_input("IP address")
                self.port_input = ui.number(
                    "Port", min=MIN_PORT, max=MAX_PORT, precision=0,
                ).props("dense outlined").style("max-width: 110px")
                ui.button("Add", icon="add", on_click=self.add_device).props("color=positive")

            ui.separator()
            self.list_column = ui.column().classes("w-full gap-2")

        self.dialog.on("show", self.reload)

    def _checking(self) -> None:
        self.banner.show(alerts.CHECKING, spinner=True)

    async def reload(self) -> None:
        try:
            await self._registry.load()
        except FanDashError as exc:
            logger.warning("device_list_load_failed", error=str(exc))
            self.banner.show(alerts.failure(exc, "list"))
        self.render_list()

    def render_list(self) -> None:
        """Redraw the device list in display mode."""
        self._edits.clear()
        flagged = self._registry.take_recently_offline()
        self.list_column.clear()
        with self.list_column:
            for device in self._registry.devices:
                offline = (
                    device.key in flagged
                    or self._reconciler.state(device.key) is CardState.OFFLINE
                )
                item = ui.row().classes("w-full items-center justify-between px-3 py-2 rounded")
                item.style(_FLAGGED_STYLE if offline else _NORMAL_STYLE)
                self._render_display(item, device)

    def _render_display(self, item: ui.row, device: Device) -> None:
        item.clear()
        with item:
            with ui.row().classes("items-center gap-1"):
                ui.label(device.name).classes("font-bold")
                ui.label(f"({device.endpoint})")
            with ui.row().classes("gap-1"):
                ui.button(
                    icon="edit", on_click=lambda: self._begin_edit(item, device),
                ).props("dense color=primary")
                ui.button(
                    icon="delete", on_click=lambda: self.remove_device(device),
                ).props("dense color=negative")

    def _begin_edit(self, item: ui.row, device: Device) -> None:
        def cancel() -> None:
            self._edits.end(device.key)
            self._render_display(item, device)

        # Closes any other open edit before these fields are drawn.
        self._edits.begin(device.key, cancel)
        item.clear()
        with item:
            with ui.row().classes("items-center gap-1 no-wrap"):
                name = ui.input(value=device.name).props("dense outlined").style("max-width: 200px")
                address, _ = masked_address_input("", device.address)
                address.style("max-width: 200px")
                port = ui.number(
                    value=device.port, min=MIN_PORT, max=MAX_PORT, precision=0,
                ).props("dense outlined").style("max-width: 100px")
            with ui.row().classes("gap-1"):

                async def save() -> None:
                    await self.save_edit(device, name.value, address.value, port.value)

                ui.button(icon="check", on_click=save).props("dense color=positive")
                ui.button(icon="close", on_click=cancel).props("dense color=negative")

    async def add_device(self) -> None:
        self.banner.clear()
        try:
            outcome = await self._registry.add(
                self.name_input.value,
                self.address_input.value,
                _port_text(self.port_input.value),
                before_probe=self._checking,
            )
        except Exception as exc:
            if not isinstance(exc, FanDashError):
                logger.exception("device_add_failed")
            # Inputs stay as typed so the operator can correct them.
            self.banner.show(alerts.failure(exc, "add"))
            return

        self.name_input.set_value("")
        self.address_input.set_value("")
        self._address_mask.reset()
        self.port_input.set_value(None)
        self.banner.show(alerts.added(outcome))
        self.render_list()
        await self._refresh()

    async def save_edit(self, original: Device, name, address, port) -> None:
        try:
            outcome = await self._registry.edit(
                original.address, name, address, _port_text(port), before_probe=self._checking,
            )
        except Exception as exc:
            if not isinstance(exc, FanDashError):
                logger.exception("device_edit_failed", key=original.key)
            self.banner.show(alerts.failure(exc, "edit"))
            await self.reload()
            return
        self._edits.end(original.key)
        self.banner.show(alerts.edited(outcome))
        self.render_list()
        await self._refresh()

    async def remove_device(self, device: Device) -> None:
        try:
            await self._registry.remove(device.address)
        except Exception as exc:
            if not isinstance(exc, FanDashError):
                logger.exception("device_remove_failed", key=device.key)
            self.banner.show(alerts.failure(exc, "delete"))
            return
        self.render_list()
        await self._refresh()
