"""Fleet dashboard page: one live card per registered device."""

from __future__ import annotations

from nicegui import app, ui

from fandash.config import DashboardConfig
from fandash.core import alerts
from fandash.exceptions import FanDashError
from fandash.ui.components.device_manager import DeviceManager
from fandash.ui.layout import DashboardHeader, apply_theme
from fandash.ui.state import build_session
from fandash.ui.theme import COLORS
from fandash.utils.logging import get_logger

logger = get_logger(__name__)


def dashboard_page(config: DashboardConfig) -> None:
    """Render the dashboard and start its refresh timers."""
    from fandash.api.app import get_management_client, get_poller

    apply_theme()

    grid = ui.element("div").classes("card-grid q-pa-md")
    session = build_session(
        config, get_poller(), get_management_client(), app.storage.user, grid,
    )
    manager = DeviceManager(session.registry, session.reconciler, session.cycle.refresh_now)
    DashboardHeader("Fan Dashboard", session.cycle, session.layout, manager.dialog.open)

    with ui.column().classes("w-full items-center"):
        empty_hint = ui.label("No devices registered yet.").style(
            f"color: {COLORS['text_secondary']}"
        )
    session.registry.on_changed.append(lambda devices: empty_hint.set_visibility(not devices))

    async def load_dashboard() -> None:
        try:
            await session.registry.load()
        except FanDashError as exc:
            logger.warning("dashboard_device_list_failed", error=str(exc))
            alert = alerts.failure(exc, "list")
            ui.notify(alert.message, type="negative", close_button=True, timeout=0)
        await session.cycle.refresh_now()

    def tick() -> None:
        session.cycle.tick()

    ui.timer(0.1, load_dashboard, once=True)
    ui.timer(1.0, tick)
