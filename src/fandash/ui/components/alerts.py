"""Alert banner shown above the device management form."""

from __future__ import annotations

from nicegui import ui

from fandash.core.alerts import Alert, AlertLevel
from fandash.ui.theme import COLORS

_LEVEL_STYLE: dict[AlertLevel, tuple[str, str]] = {
    AlertLevel.SUCCESS: (COLORS["accent_green"], "check_circle"),
    AlertLevel.INFO: (COLORS["accent_blue"], "search"),
    AlertLevel.WARNING: (COLORS["accent_yellow"], "warning"),
    AlertLevel.DANGER: (COLORS["accent_red"], "error"),
}


class AlertBanner:
    """One reusable banner; showing a new alert replaces the current one."""

    def __init__(self) -> None:
        self._row = ui.row().classes("w-full items-center justify-between px-3 py-2 rounded")
        self._row.set_visibility(False)
        self._timer: ui.timer | None = None
        self.current: Alert | None = None

    def show(self, alert: Alert, spinner: bool = False) -> None:
        self._cancel_timer()
        self.current = alert
        color, icon = _LEVEL_STYLE[alert.level]
        self._row.clear()
        self._row.style(replace=f"background: {color}30; border: 1px solid {color}; color: {color}")
        with self._row:
            with ui.row().classes("items-center gap-2"):
                ui.icon(icon)
                ui.label(alert.message)
            if spinner:
                ui.spinner(size="sm").style(f"color: {color}")
            elif alert.persistent:
                ui.button(icon="close", on_click=self.clear).props("flat round dense size=sm")
        self._row.set_visibility(True)

        if alert.timeout_s is not None:
            with self._row:
                self._timer = ui.timer(alert.timeout_s, self.clear, once=True)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def clear(self) -> None:
        self._cancel_timer()
        self.current = None
        self._row.clear()
        self._row.set_visibility(False)
