"""Status indicator components."""

from __future__ import annotations

from nicegui import ui

from fandash.ui.theme import COLORS


def status_dot(color: str) -> ui.element:
    """Create the round online/offline dot shown in a card header."""
    dot = ui.element("span").classes("inline-block rounded-full ml-2")
    dot.style(f"width: 12px; height: 12px; background-color: {color}; vertical-align: middle")
    return dot


def set_dot_color(dot: ui.element, color: str) -> None:
    dot.style(f"background-color: {color}")


def endpoint_badge(endpoint: str) -> ui.label:
    """Create the address:port badge."""
    with ui.row().classes("items-center gap-1 px-2 py-1 rounded").style(
        "background: #212529;"
    ):
        ui.icon("lan").style(f"color: {COLORS['text_primary']}; font-size: 0.9rem")
        label = ui.label(endpoint).classes("text-xs font-bold")
    return label


def count_badge(icon: str, text: str, color: str) -> ui.label:
    """Create one of the header aggregate badges (online, offline, last update)."""
    with ui.row().classes("items-center gap-1 px-2 py-1 rounded").style(
        f"background: {color}20; border: 1px solid {color}40"
    ):
        ui.icon(icon).style(f"color: {color}; font-size: 1rem")
        label = ui.label(text).classes("text-xs font-bold").style(f"color: {color}")
    return label
