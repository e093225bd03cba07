"""Per-device card state machine.

Decides, for every poll result, whether a device's card is created,
patched in place, or torn down and rebuilt. The previous state is tracked
explicitly per device key rather than read back from rendered output.

Transitions on a new result:

* UNINITIALIZED -> ONLINE/OFFLINE: create the card at the device's
  registry position and attach its data.
* ONLINE <-> OFFLINE: destroy and recreate the card. Chart data is attached
  in a follow-up step scheduled after creation, since the new chart canvas
  only exists once the card has been inserted.
* ONLINE -> ONLINE: patch gauges and the trend chart in place, keeping the
  active sub-view.
* OFFLINE -> OFFLINE: refresh the error text only.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from fandash.core.history import HistoryStore, TrendChart
from fandash.core.thresholds import (
    MEMORY_COLOR,
    Tone,
    cpu_color,
    speed_tone,
    status_dot_color,
    temperature_tone,
)
from fandash.models.status import StatusResult
from fandash.utils.logging import get_logger

logger = get_logger(__name__)


class CardState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ONLINE = "online"
    OFFLINE = "offline"


class SubView(str, Enum):
    OVERVIEW = "overview"
    HISTORY = "history"


class CardAction(str, Enum):
    """What the reconciler did with a result."""

    CREATED = "created"
    REBUILT = "rebuilt"
    PATCHED = "patched"
    ERROR_REFRESHED = "error_refreshed"


@dataclass(frozen=True)
class GaugeReading:
    """Everything an online card's overview needs to redraw itself."""

    temperature: float
    temperature_tone: Tone
    temperature_width: float
    speed: int
    speed_tone: Tone
    speed_width: float
    cpu: float
    cpu_color: str
    memory: float
    memory_color: str
    dot_color: str

    @property
    def temperature_text(self) -> str:
        return f"{self.temperature:g}°C"

    @property
    def speed_text(self) -> str:
        return f"{self.speed}%"


def _bar_width(value: float) -> float:
    return max(0.0, min(float(value), 100.0))


def gauge_reading(result: StatusResult) -> GaugeReading:
    """Derive bar widths, labels and colours for an online result."""
    sample = result.sample
    if sample is None:
        raise ValueError(f"no sample for offline device {result.key}")
    return GaugeReading(
        temperature=sample.temperature,
        temperature_tone=temperature_tone(sample.temperature),
        temperature_width=_bar_width(sample.temperature),
        speed=sample.speed,
        speed_tone=speed_tone(sample.speed),
        speed_width=_bar_width(sample.speed),
        cpu=sample.cpu,
        cpu_color=cpu_color(sample.cpu),
        memory=sample.memory,
        memory_color=MEMORY_COLOR,
        dot_color=status_dot_color(True),
    )


class CardView(Protocol):
    """Rendering sink for device cards."""

    def create_card(self, result: StatusResult, index: int) -> None:
        """Build a card for *result* at registry position *index*."""

    def destroy_card(self, key: str) -> None: ...

    def patch_gauges(self, key: str, reading: GaugeReading) -> None: ...

    def set_error(self, key: str, message: str) -> None: ...

    def show_sub_view(self, key: str, view: SubView) -> None: ...

    def create_trend_chart(self, key: str) -> TrendChart | None: ...


Scheduler = Callable[[Callable[[], None]], object]


def call_soon(callback: Callable[[], None]) -> object:
    """Run *callback* on the next event-loop iteration."""
    return asyncio.get_running_loop().call_soon(callback)


class CardReconciler:
    """Drives a CardView from poll results."""

    def __init__(
        self,
        view: CardView,
        history: HistoryStore,
        schedule: Scheduler = call_soon,
    ) -> None:
        self._view = view
        self._history = history
        self._schedule = schedule
        self._states: dict[str, CardState] = {}
        self._sub_views: dict[str, SubView] = {}
        # Bumped on every card creation so stale deferred attaches are dropped.
        self._generations: dict[str, int] = {}

    def state(self, key: str) -> CardState:
        return self._states.get(key, CardState.UNINITIALIZED)

    def sub_view(self, key: str) -> SubView:
        return self._sub_views.get(key, SubView.OVERVIEW)

    def keys(self) -> list[str]:
        return list(self._states)

    def reconcile(self, result: StatusResult, index: int) -> CardAction:
        """Apply one poll result to the device's card."""
        key = result.key
        previous = self.state(key)
        current = CardState.ONLINE if result.online else CardState.OFFLINE

        if previous is CardState.UNINITIALIZED:
            self._create(result, index)
            self.attach(result)
            logger.debug("card_created", key=key, state=current.value)
            return CardAction.CREATED

        if previous is not current:
            self._destroy(key)
            generation = self._create(result, index)
            self._schedule(lambda: self._deferred_attach(result, generation))
            logger.info(
                "card_rebuilt", key=key, previous=previous.value, state=current.value,
            )
            return CardAction.REBUILT

        if current is CardState.ONLINE:
            self._patch(result)
            return CardAction.PATCHED

        self._view.set_error(key, result.error or "")
        return CardAction.ERROR_REFRESHED

    def attach(self, result: StatusResult) -> None:
        """Second creation phase: bind gauge and chart data to a built card."""
        if result.online:
            self._patch(result)
        else:
            self._view.set_error(result.key, result.error or "")

    def _deferred_attach(self, result: StatusResult, generation: int) -> None:
        key = result.key
        if self._generations.get(key) != generation:
            logger.debug("card_attach_skipped", key=key)
            return
        self.attach(result)

    def _create(self, result: StatusResult, index: int) -> int:
        key = result.key
        self._view.create_card(result, index)
        self._states[key] = CardState.ONLINE if result.online else CardState.OFFLINE
        self._sub_views[key] = SubView.OVERVIEW
        generation = self._generations.get(key, 0) + 1
        self._generations[key] = generation
        return generation

    def _destroy(self, key: str) -> None:
        self._view.destroy_card(key)
        # The chart was bound to the destroyed card's canvas.
        self._history.release(key)

    def _patch(self, result: StatusResult) -> None:
        key = result.key
        self._view.patch_gauges(key, gauge_reading(result))
        self._history.render(key, self._view)
        self._view.show_sub_view(key, self.sub_view(key))

    def show_history(self, key: str, show: bool) -> bool:
        """Switch an online card between overview and history.

        Returns False when the card is not online, in which case nothing
        changes.
        """
        if self.state(key) is not CardState.ONLINE:
            return False
        view = SubView.HISTORY if show else SubView.OVERVIEW
        self._sub_views[key] = view
        self._view.show_sub_view(key, view)
        if show:
            self._history.render(key, self._view)
        return True

    def forget(self, key: str) -> None:
        """Remove a device's card and all view state."""
        if self.state(key) is not CardState.UNINITIALIZED:
            self._destroy(key)
            self._generations[key] = self._generations.get(key, 0) + 1
        self._states.pop(key, None)
        self._sub_views.pop(key, None)

    def rekey(self, old_key: str, new_key: str) -> None:
        """Drop the card after an edit so the next pass rebuilds it.

        The rebuilt card carries the edited name and port, under *new_key*
        when the address changed.
        """
        self.forget(old_key)
        logger.debug("card_rekeyed", old=old_key, new=new_key)
