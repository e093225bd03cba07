"""Per-browser dashboard session wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableMapping

from nicegui import ui

from fandash.config import DashboardConfig
from fandash.core.history import HistoryStore
from fandash.core.layout_pref import LayoutPreference
from fandash.core.management import ManagementClient
from fandash.core.poller import StatusPoller
from fandash.core.reconciler import CardReconciler
from fandash.core.refresh import RefreshCycle
from fandash.core.registry import DeviceRegistry
from fandash.ui.components.device_card import NiceGuiCardView


@dataclass
class DashboardSession:
    """Every stateful object behind one open dashboard page.

    Nothing here is shared between browser sessions except the HTTP
    clients inside the poller and management client.
    """

    registry: DeviceRegistry
    history: HistoryStore
    layout: LayoutPreference
    view: NiceGuiCardView
    reconciler: CardReconciler
    cycle: RefreshCycle


def build_session(
    config: DashboardConfig,
    poller: StatusPoller,
    management: ManagementClient,
    storage: MutableMapping[str, str],
    grid: ui.element,
) -> DashboardSession:
    """Create and cross-wire the session objects for a page.

    Args:
        config: Process configuration.
        poller: Shared status poller.
        management: Shared management endpoint client.
        storage: Persistent per-browser mapping for the layout preference.
        grid: Container the device cards are rendered into.
    """
    layout = LayoutPreference(storage)
    layout.load()

    history = HistoryStore(max_points=config.max_history_points)
    registry = DeviceRegistry(management, prober=poller.probe)
    view = NiceGuiCardView(grid, layout)
    reconciler = CardReconciler(view, history)
    cycle = RefreshCycle(
        registry, poller, history, reconciler, period_s=config.refresh_interval_s,
    )

    cycle.follow_registry()
    layout.listeners.append(view.apply_layout)
    view.on_toggle_history = reconciler.show_history

    return DashboardSession(
        registry=registry,
        history=history,
        layout=layout,
        view=view,
        reconciler=reconciler,
        cycle=cycle,
    )
