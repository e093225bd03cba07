"""ECharts builders for the CPU/memory ring and the history trend chart."""

from __future__ import annotations

from nicegui import ui

from fandash.core.history import TREND_SERIES
from fandash.core.thresholds import MEMORY_COLOR, REMAINDER_COLOR, cpu_color
from fandash.ui.theme import COLORS


def _ring(name: str, value: float, color: str, radius: list[str]) -> dict:
    value = max(0.0, min(float(value), 100.0))
    return {
        "name": name,
        "type": "pie",
        "radius": radius,
        "silent": True,
        "label": {"show": False},
        "animation": False,
        "data": [
            {"value": value, "itemStyle": {"color": color}},
            {"value": round(100 - value, 1), "itemStyle": {"color": REMAINDER_COLOR}},
        ],
    }


def load_ring_series(cpu: float, memory: float, cpu_accent: str | None = None) -> list[dict]:
    """Outer ring CPU, inner ring memory."""
    return [
        _ring("CPU", cpu, cpu_accent or cpu_color(cpu), ["70%", "95%"]),
        _ring("Memory", memory, MEMORY_COLOR, ["35%", "62%"]),
    ]


def load_ring(cpu: float = 0.0, memory: float = 0.0) -> ui.echart:
    """Create the small CPU/memory ring chart."""
    return ui.echart({
        "backgroundColor": "transparent",
        "tooltip": {"show": False},
        "series": load_ring_series(cpu, memory),
    }).style("width: 60px; height: 60px")


def trend_chart() -> ui.echart:
    """Create an empty history trend chart with the four telemetry series."""
    return ui.echart({
        "backgroundColor": "#f8f9fa",
        "animation": False,
        "tooltip": {"trigger": "axis"},
        "legend": {
            "data": [name for name, _ in TREND_SERIES],
            "textStyle": {"color": COLORS["text_dark"]},
        },
        "grid": {"left": 32, "right": 12, "top": 36, "bottom": 24},
        "xAxis": {"type": "category", "data": []},
        "yAxis": {"type": "value", "min": 0, "max": 100},
        "series": [
            {
                "name": name,
                "type": "line",
                "smooth": 0.3,
                "showSymbol": False,
                "data": [],
                "lineStyle": {"color": color},
                "itemStyle": {"color": color},
            }
            for name, color in TREND_SERIES
        ],
    }).classes("w-full").style("height: 185px")


class EChartTrend:
    """Adapts a ``ui.echart`` to the history store's TrendChart interface."""

    def __init__(self, chart: ui.echart) -> None:
        self.chart = chart

    def update(self, labels: list[str], series: list[list[float]]) -> None:
        self.chart.options["xAxis"]["data"] = labels
        for entry, data in zip(self.chart.options["series"], series):
            entry["data"] = data
        self.chart.update()
