"""Polling, history and card state for the dashboard."""

from fandash.core.history import HistoryBuffer, HistoryStore
from fandash.core.layout_pref import CardLayout, LayoutPreference
from fandash.core.poller import StatusPoller
from fandash.core.reconciler import CardAction, CardReconciler, CardState, SubView
from fandash.core.refresh import RefreshCycle, RefreshSummary
from fandash.core.registry import DeviceRegistry, RegistryOutcome

__all__ = [
    "CardAction",
    "CardLayout",
    "CardReconciler",
    "CardState",
    "DeviceRegistry",
    "HistoryBuffer",
    "HistoryStore",
    "LayoutPreference",
    "RefreshCycle",
    "RefreshSummary",
    "RegistryOutcome",
    "StatusPoller",
    "SubView",
]
