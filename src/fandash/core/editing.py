"""Single open edit at a time for the device management list."""

from __future__ import annotations

from typing import Callable


class EditCoordinator:
    """Tracks which list entry is in edit mode.

    Beginning an edit on one entry cancels any other open edit first, so
    its display row is restored before the new edit fields appear.
    """

    def __init__(self) -> None:
        self._key: str | None = None
        self._cancel: Callable[[], None] | None = None

    @property
    def editing(self) -> str | None:
        return self._key

    def begin(self, key: str, cancel: Callable[[], None]) -> None:
        if self._key is not None and self._key != key:
            previous = self._cancel
            self._key = None
            self._cancel = None
            if previous is not None:
                previous()
        self._key = key
        self._cancel = cancel

    def end(self, key: str) -> None:
        if self._key == key:
            self._key = None
            self._cancel = None

    def clear(self) -> None:
        self._key = None
        self._cancel = None
