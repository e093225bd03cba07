"""Unit tests for the persisted card layout preference."""

from __future__ import annotations

from fandash.core.layout_pref import STORAGE_KEY, CardLayout, LayoutPreference


class TestLayoutPreference:
    def test_defaults_to_two_per_row(self):
        pref = LayoutPreference({})
        assert pref.load() is CardLayout.TWO_PER_ROW
        assert pref.column_class == "col-lg-6"

    def test_unknown_stored_value_falls_back(self):
        pref = LayoutPreference({STORAGE_KEY: "four"})
        assert pref.load() is CardLayout.TWO_PER_ROW

    def test_toggle_persists(self):
        storage: dict[str, str] = {}
        pref = LayoutPreference(storage)
        pref.load()
        assert pref.toggle() is CardLayout.THREE_PER_ROW
        assert storage[STORAGE_KEY] == "three"
        assert pref.column_class == "col-lg-4"

    def test_survives_reload(self):
        storage: dict[str, str] = {}
        LayoutPreference(storage).toggle()
        assert LayoutPreference(storage).load() is CardLayout.THREE_PER_ROW

    def test_toggle_twice_restores(self):
        storage: dict[str, str] = {}
        pref = LayoutPreference(storage)
        pref.toggle()
        pref.toggle()
        assert pref.value is CardLayout.TWO_PER_ROW
        assert storage[STORAGE_KEY] == "two"

    def test_label_names_target_layout(self):
        pref = LayoutPreference({})
        pref.load()
        assert pref.toggle_label == ("Toggle 3 cards per row", "view_module")
        pref.toggle()
        assert pref.toggle_label == ("Toggle 2 cards per row", "grid_view")

    def test_listeners_notified(self):
        pref = LayoutPreference({})
        seen = []
        pref.listeners.append(seen.append)
        pref.toggle()
        assert seen == [CardLayout.THREE_PER_ROW]
