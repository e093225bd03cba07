"""Persisted two/three cards-per-row layout toggle."""

from __future__ import annotations

from enum import Enum
from typing import Callable, MutableMapping

from fandash.utils.logging import get_logger

logger = get_logger(__name__)

STORAGE_KEY = "cardLayout"


class CardLayout(str, Enum):
    TWO_PER_ROW = "two"
    THREE_PER_ROW = "three"

    @property
    def column_class(self) -> str:
        return "col-lg-4" if self is CardLayout.THREE_PER_ROW else "col-lg-6"

    def flipped(self) -> CardLayout:
        if self is CardLayout.THREE_PER_ROW:
            return CardLayout.TWO_PER_ROW
        return CardLayout.THREE_PER_ROW


# Toggle control text and icon, keyed by the layout it switches *to*.
TOGGLE_LABELS: dict[CardLayout, tuple[str, str]] = {
    CardLayout.TWO_PER_ROW: ("Toggle 2 cards per row", "grid_view"),
    CardLayout.THREE_PER_ROW: ("Toggle 3 cards per row", "view_module"),
}


class LayoutPreference:
    """Card density preference backed by a persistent mapping.

    In the web UI the mapping is NiceGUI's per-browser ``app.storage.user``;
    anything dict-like works.
    """

    def __init__(self, storage: MutableMapping[str, str]) -> None:
        self._storage = storage
        self.value = CardLayout.TWO_PER_ROW
        self.listeners: list[Callable[[CardLayout], None]] = []

    def load(self) -> CardLayout:
        stored = self._storage.get(STORAGE_KEY)
        try:
            self.value = CardLayout(stored)
        except ValueError:
            self.value = CardLayout.TWO_PER_ROW
        return self.value

    def toggle(self) -> CardLayout:
        """Flip, persist and re-apply the layout."""
        self.value = self.value.flipped()
        self._storage[STORAGE_KEY] = self.value.value
        logger.debug("layout_toggled", layout=self.value.value)
        for listener in self.listeners:
            listener(self.value)
        return self.value

    @property
    def column_class(self) -> str:
        return self.value.column_class

    @property
    def toggle_label(self) -> tuple[str, str]:
        """(text, icon) for the control; names the layout a click switches to."""
        return TOGGLE_LABELS[self.value.flipped()]
