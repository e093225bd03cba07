"""Countdown-driven refresh passes over every registered device."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from fandash.core.history import HistoryStore
from fandash.core.poller import StatusPoller
from fandash.core.reconciler import CardReconciler
from fandash.core.registry import DeviceRegistry
from fandash.models.device import Device
from fandash.models.status import StatusResult
from fandash.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PERIOD_S = 10


@dataclass(frozen=True)
class RefreshSummary:
    """Aggregate counters published after each pass."""

    online: int
    offline: int
    total: int
    updated_at: datetime

    @property
    def updated_label(self) -> str:
        return self.updated_at.strftime("%H:%M:%S")


class RefreshCycle:
    """Owns the countdown and runs refresh passes.

    ``tick()`` is driven once per second by a timer. When the countdown
    reaches zero it is reset to the period and a pass is started in the
    background, so countdown listeners keep firing every second even while
    a pass is waiting on slow devices.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        poller: StatusPoller,
        history: HistoryStore,
        reconciler: CardReconciler,
        period_s: int = DEFAULT_PERIOD_S,
    ) -> None:
        self._registry = registry
        self._poller = poller
        self._history = history
        self._reconciler = reconciler
        self.period_s = period_s
        self.countdown = period_s
        self.summary: RefreshSummary | None = None
        self.countdown_listeners: list[Callable[[int], None]] = []
        self.summary_listeners: list[Callable[[RefreshSummary], None]] = []
        self._tasks: set[asyncio.Task] = set()

    def tick(self) -> asyncio.Task | None:
        """Advance the countdown by one second.

        Returns the task running the pass when this tick started one.
        """
        self.countdown -= 1
        task = None
        if self.countdown <= 0:
            self.countdown = self.period_s
            task = self.start_refresh()
        for listener in self.countdown_listeners:
            listener(self.countdown)
        return task

    def reset_countdown(self) -> None:
        self.countdown = self.period_s
        for listener in self.countdown_listeners:
            listener(self.countdown)

    def start_refresh(self) -> asyncio.Task:
        """Run a pass in the background without touching the countdown."""
        task = asyncio.get_running_loop().create_task(self.refresh_now())
        self._tasks.add(task)
        task.add_done_callback(self._pass_done)
        return task

    def _pass_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("refresh_pass_failed", error=str(exc), exc_info=exc)

    async def _fetch_all(self, devices: list[Device]) -> list[StatusResult]:
        settled = await asyncio.gather(
            *(self._poller.fetch_status(d) for d in devices),
            return_exceptions=True,
        )
        results: list[StatusResult] = []
        for device, outcome in zip(devices, settled):
            if isinstance(outcome, BaseException):
                logger.warning("fetch_status_raised", key=device.key, error=str(outcome))
                outcome = StatusResult.unavailable(device)
            results.append(outcome)
        return results

    async def refresh_now(self) -> RefreshSummary:
        """Poll every registered device concurrently and apply the results."""
        devices = self._registry.devices
        results = await self._fetch_all(devices)

        online = 0
        applied = 0
        for result in results:
            index = self._registry.index_of(result.key)
            if index < 0:
                # Removed while the pass was in flight.
                logger.debug("refresh_result_dropped", key=result.key)
                continue
            applied += 1
            if result.online:
                online += 1
                self._history.record(result.key, result.sample)
            try:
                self._reconciler.reconcile(result, index)
            except Exception:
                logger.exception("card_reconcile_failed", key=result.key)

        self._prune_unregistered()

        summary = RefreshSummary(
            online=online,
            offline=applied - online,
            total=applied,
            updated_at=datetime.now(),
        )
        self.summary = summary
        logger.info("refresh_pass_complete", online=summary.online, offline=summary.offline)
        for listener in self.summary_listeners:
            listener(summary)
        return summary

    def follow_registry(self) -> None:
        """Drop cards and history as the registry edits or removes devices."""
        self._registry.on_edited.append(self._device_edited)
        self._registry.on_removed.append(self._device_removed)

    def _device_edited(self, old_key: str, new_key: str) -> None:
        self._reconciler.rekey(old_key, new_key)
        self._history.rekey(old_key, new_key)

    def _device_removed(self, key: str) -> None:
        self._reconciler.forget(key)
        self._history.discard(key)

    def _prune_unregistered(self) -> None:
        registered = {d.key for d in self._registry.devices}
        for key in self._reconciler.keys():
            if key not in registered:
                self._reconciler.forget(key)
                self._history.discard(key)
                logger.debug("card_pruned", key=key)

    async def wait_idle(self) -> None:
        """Wait for any background passes to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
