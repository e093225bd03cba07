"""Bounded per-device telemetry history feeding the trend charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from fandash.models.status import StatusSample
from fandash.utils.logging import get_logger

logger = get_logger(__name__)

MAX_HISTORY_POINTS = 120

# (series name, line colour) in chart order
TREND_SERIES: tuple[tuple[str, str], ...] = (
    ("Temp (°C)", "#0d6efd"),
    ("Fan Speed (%)", "#198754"),
    ("CPU (%)", "#6610f2"),
    ("Memory (%)", "#ffc107"),
)


class TrendChart(Protocol):
    """Handle to a live trend chart owned by a card."""

    def update(self, labels: list[str], series: list[list[float]]) -> None: ...


class TrendChartFactory(Protocol):
    """Creates a trend chart bound to a device's card, or None if no canvas exists."""

    def create_trend_chart(self, key: str) -> TrendChart | None: ...


@dataclass
class HistoryBuffer:
    """Parallel rolling series for one device."""

    max_points: int = MAX_HISTORY_POINTS
    labels: list[str] = field(default_factory=list)
    temp: list[float] = field(default_factory=list)
    speed: list[int] = field(default_factory=list)
    cpu: list[float] = field(default_factory=list)
    memory: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.labels)

    def _all_series(self) -> tuple[list, ...]:
        return (self.labels, self.temp, self.speed, self.cpu, self.memory)

    def append(self, sample: StatusSample) -> None:
        self.labels.append(sample.label)
        self.temp.append(sample.temperature)
        self.speed.append(sample.speed)
        self.cpu.append(sample.cpu)
        self.memory.append(sample.memory)
        overflow = len(self.labels) - self.max_points
        if overflow > 0:
            for series in self._all_series():
                del series[:overflow]

    def series(self) -> list[list[float]]:
        """The four numeric series in TREND_SERIES order (copies)."""
        return [list(self.temp), list(self.speed), list(self.cpu), list(self.memory)]


class HistoryStore:
    """Owns every device's history buffer and its trend chart handle."""

    def __init__(self, max_points: int = MAX_HISTORY_POINTS) -> None:
        self.max_points = max_points
        self._buffers: dict[str, HistoryBuffer] = {}
        self._charts: dict[str, TrendChart] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._buffers

    def buffer(self, key: str) -> HistoryBuffer:
        """Return the buffer for *key*, creating an empty one if needed."""
        if key not in self._buffers:
            self._buffers[key] = HistoryBuffer(max_points=self.max_points)
        return self._buffers[key]

    def record(self, key: str, sample: StatusSample) -> HistoryBuffer:
        buf = self.buffer(key)
        buf.append(sample)
        return buf

    def render(self, key: str, factory: TrendChartFactory) -> bool:
        """Push the buffer into the device's trend chart.

        The chart is created on first render and updated in place after
        that. Returns False when the card has no chart canvas to draw on.
        """
        buf = self.buffer(key)
        chart = self._charts.get(key)
        if chart is None:
            chart = factory.create_trend_chart(key)
            if chart is None:
                return False
            self._charts[key] = chart
            logger.debug("trend_chart_created", key=key)
        chart.update(list(buf.labels), buf.series())
        return True

    def has_chart(self, key: str) -> bool:
        return key in self._charts

    def release(self, key: str) -> None:
        """Drop the chart handle; called when the card's canvas is destroyed."""
        self._charts.pop(key, None)

    def discard(self, key: str) -> None:
        """Forget all history for a device removed from the registry."""
        self._buffers.pop(key, None)
        self._charts.pop(key, None)

    def rekey(self, old_key: str, new_key: str) -> None:
        """Move a device's history to a new key after an address change."""
        if old_key == new_key:
            return
        buf = self._buffers.pop(old_key, None)
        if buf is not None:
            self._buffers[new_key] = buf
        # The card is rebuilt under the new key, so any chart handle is stale.
        self._charts.pop(old_key, None)

    def keys(self) -> list[str]:
        return list(self._buffers)
