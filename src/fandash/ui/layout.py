"""Dashboard header with aggregate counters, countdown and layout toggle."""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from fandash.core.layout_pref import LayoutPreference
from fandash.core.refresh import RefreshCycle, RefreshSummary
from fandash.ui.components.status_indicator import count_badge
from fandash.ui.theme import COLORS, CSS


class DashboardHeader:
    """Header bar bound to a refresh cycle and layout preference."""

    def __init__(
        self,
        title: str,
        cycle: RefreshCycle,
        layout: LayoutPreference,
        on_manage: Callable[[], None],
    ) -> None:
        self._layout = layout

        with ui.header(elevated=True).classes("q-pa-sm").style(
            f"background-color: {COLORS['bg_secondary']}"
        ):
            with ui.row().classes("w-full items-center q-gutter-md"):
                ui.icon("mode_fan").classes("text-h5").style(f"color: {COLORS['online']}")
                ui.label(title).classes("text-h6 text-bold")
                ui.space()
                self.online = count_badge("check_circle", "Online: 0", COLORS["online"])
                self.offline = count_badge("cancel", "Offline: 0", COLORS["offline"])
                self.updated = count_badge("schedule", "Last update: --", COLORS["text_secondary"])
                with ui.row().classes("items-center gap-1"):
                    ui.icon("autorenew").style(f"color: {COLORS['text_secondary']}")
                    self.countdown = ui.label(str(cycle.countdown)).classes("text-bold")
                ui.space()
                self.layout_button = ui.button(on_click=layout.toggle).props("flat color=white")
                ui.button("Manage Devices", icon="settings", on_click=on_manage).props(
                    "color=primary"
                )

        cycle.countdown_listeners.append(self.set_countdown)
        cycle.summary_listeners.append(self.set_summary)
        layout.listeners.append(lambda _value: self.refresh_layout_button())
        self.refresh_layout_button()

    def set_countdown(self, seconds: int) -> None:
        self.countdown.set_text(str(seconds))

    def set_summary(self, summary: RefreshSummary) -> None:
        self.online.set_text(f"Online: {summary.online}")
        self.offline.set_text(f"Offline: {summary.offline}")
        self.updated.set_text(f"Last update: {summary.updated_label}")

    def refresh_layout_button(self) -> None:
        text, icon = self._layout.toggle_label
        self.layout_button.set_text(text)
        self.layout_button.props(f"icon={icon}")


def apply_theme() -> None:
    ui.add_css(CSS)
    ui.dark_mode(True)
    ui.colors(primary=COLORS["accent_blue"], positive=COLORS["accent_green"],
              negative=COLORS["accent_red"])
