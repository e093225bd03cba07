"""NiceGUI rendering of device cards.

``NiceGuiCardView`` is the concrete sink the card reconciler drives. It
only builds, patches and removes elements; every decision about *which*
of those to do is made by the reconciler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from nicegui import ui

from fandash.core.layout_pref import CardLayout, LayoutPreference
from fandash.core.reconciler import GaugeReading, SubView
from fandash.core.thresholds import status_dot_color
from fandash.models.status import StatusResult
from fandash.ui.components.charts import EChartTrend, load_ring, load_ring_series, trend_chart
from fandash.ui.components.status_indicator import endpoint_badge, set_dot_color, status_dot
from fandash.ui.theme import COLORS, tone_style

_LAYOUT_CLASSES = " ".join(layout.column_class for layout in CardLayout)


@dataclass
class _CardWidgets:
    """Handles to the mutable parts of one card."""

    wrapper: ui.element
    dot: ui.element | None = None
    error_label: ui.label | None = None
    temp_bar: ui.label | None = None
    speed_bar: ui.label | None = None
    ring: ui.echart | None = None
    trend: ui.echart | None = None
    overview: ui.element | None = None
    history: ui.element | None = None
    back_button: ui.button | None = None

    @property
    def online(self) -> bool:
        return self.error_label is None


def _gauge(label: str, icon: str) -> ui.label:
    """Striped percentage bar with a caption; returns the bar element."""
    with ui.row().classes("items-center gap-1 px-2 py-1 rounded mt-2 mb-1").style(
        f"background: {COLORS['text_primary']}; color: {COLORS['text_dark']}"
    ):
        ui.icon(icon).style("font-size: 0.9rem")
        ui.label(label).classes("text-xs font-bold")
    with ui.element("div").classes("gauge-track"):
        bar = ui.label("").classes("gauge-bar")
    return bar


class NiceGuiCardView:
    """Builds and mutates device cards inside a grid container."""

    def __init__(self, container: ui.element, layout: LayoutPreference) -> None:
        self._container = container
        self._layout = layout
        self._cards: dict[str, _CardWidgets] = {}
        self.on_toggle_history: Callable[[str, bool], None] = lambda key, show: None

    def create_card(self, result: StatusResult, index: int) -> None:
        device = result.device
        key = result.key
        existing = len(self._cards)

        with self._container:
            wrapper = ui.element("div").classes(
                f"pi-card col-sm-12 col-md-6 {self._layout.column_class}"
            )
        widgets = _CardWidgets(wrapper=wrapper)

        with wrapper, ui.card().classes("w-full p-0 gap-0 shadow-lg"):
            header_bg = COLORS["accent_red"] if not result.online else COLORS["bg_tertiary"]
            with ui.row().classes("w-full items-center justify-between p-3").style(
                f"background: {header_bg}"
            ):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("developer_board").classes("text-lg")
                    ui.label(device.name).classes("text-h6")
                    if result.online:
                        widgets.back_button = ui.button(
                            "Back", icon="arrow_back",
                            on_click=lambda: self.on_toggle_history(key, False),
                        ).props("outline dense size=sm color=white")
                        widgets.back_button.set_visibility(False)
                with ui.row().classes("items-center gap-1"):
                    endpoint_badge(device.endpoint)
                    widgets.dot = status_dot(status_dot_color(result.online))

            with ui.column().classes("w-full p-3"):
                if not result.online:
                    with ui.row().classes("items-center gap-1 px-3 py-2 rounded").style(
                        f"background: {COLORS['accent_red']}"
                    ):
                        ui.icon("warning")
                        widgets.error_label = ui.label(result.error or "").classes("text-h6")
                else:
                    self._build_online_body(key, widgets)

        self._cards[key] = widgets
        if index < existing:
            wrapper.move(target_index=index)

    def _build_online_body(self, key: str, widgets: _CardWidgets) -> None:
        widgets.overview = ui.row().classes("w-full no-wrap")
        with widgets.overview:
            with ui.column().classes("gap-0 pr-3").style("width: 75%"):
                widgets.temp_bar = _gauge("CPU Temp", "thermostat")
                widgets.speed_bar = _gauge("Fan Speed", "mode_fan")
                ui.button(
                    "Show History", icon="show_chart",
                    on_click=lambda: self.on_toggle_history(key, True),
                ).props("dense size=sm color=white text-color=dark").classes("mt-4")
            with ui.column().classes("items-center justify-center").style("width: 25%"):
                widgets.ring = load_ring()
                with ui.column().classes("gap-0 px-2 py-1 rounded text-xs").style(
                    "background: #212529"
                ):
                    ui.label("CPU").classes("font-bold")
                    ui.separator()
                    ui.label("Memory").classes("font-bold")

        widgets.history = ui.column().classes("w-full rounded p-2").style(
            f"background: {COLORS['text_primary']}"
        )
        with widgets.history:
            widgets.trend = trend_chart()
        widgets.history.set_visibility(False)

    def destroy_card(self, key: str) -> None:
        widgets = self._cards.pop(key, None)
        if widgets is not None:
            self._container.remove(widgets.wrapper)

    def patch_gauges(self, key: str, reading: GaugeReading) -> None:
        widgets = self._cards.get(key)
        if widgets is None or not widgets.online:
            return
        widgets.temp_bar.set_text(reading.temperature_text)
        widgets.temp_bar.style(
            replace=f"width: {reading.temperature_width:.1f}%; {tone_style(reading.temperature_tone)}"
        )
        widgets.speed_bar.set_text(reading.speed_text)
        widgets.speed_bar.style(
            replace=f"width: {reading.speed_width:.0f}%; {tone_style(reading.speed_tone)}"
        )
        widgets.ring.options["series"] = load_ring_series(
            reading.cpu, reading.memory, reading.cpu_color,
        )
        widgets.ring.update()
        set_dot_color(widgets.dot, reading.dot_color)

    def set_error(self, key: str, message: str) -> None:
        widgets = self._cards.get(key)
        if widgets is not None and widgets.error_label is not None:
            widgets.error_label.set_text(message)

    def show_sub_view(self, key: str, view: SubView) -> None:
        widgets = self._cards.get(key)
        if widgets is None or not widgets.online:
            return
        showing_history = view is SubView.HISTORY
        widgets.overview.set_visibility(not showing_history)
        widgets.history.set_visibility(showing_history)
        widgets.back_button.set_visibility(showing_history)

    def create_trend_chart(self, key: str) -> EChartTrend | None:
        widgets = self._cards.get(key)
        if widgets is None or widgets.trend is None:
            return None
        return EChartTrend(widgets.trend)

    def apply_layout(self, layout: CardLayout) -> None:
        """Re-apply the column width class to every rendered card."""
        for widgets in self._cards.values():
            widgets.wrapper.classes(remove=_LAYOUT_CLASSES, add=layout.column_class)
