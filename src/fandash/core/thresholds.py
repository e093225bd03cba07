"""Colour thresholds for temperature, fan speed and CPU gauges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Tone(str, Enum):
    """Bar colour tiers, named after the dashboard palette."""

    DANGER = "danger"
    WARNING = "warning"
    PRIMARY = "primary"
    INFO = "info"
    SUCCESS = "success"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Band:
    """Lower bound (inclusive) at which a tone applies."""

    minimum: float
    tone: Tone


# Checked top-down; the first band whose minimum is met wins.
TEMPERATURE_BANDS: tuple[Band, ...] = (
    Band(70, Tone.DANGER),
    Band(50, Tone.WARNING),
    Band(40, Tone.PRIMARY),
)
TEMPERATURE_DEFAULT = Tone.INFO

SPEED_BANDS: tuple[Band, ...] = (
    Band(80, Tone.DANGER),
    Band(25, Tone.SUCCESS),
)
SPEED_DEFAULT = Tone.NEUTRAL

CPU_HIGH = "#dc3545"
CPU_MID = "#ffc107"
CPU_LOW = "#0d6efd"

MEMORY_COLOR = "#ffc107"
REMAINDER_COLOR = "#6c757d"
ONLINE_DOT = "#4be34b"
OFFLINE_DOT = "#dc3545"


def _classify(value: float, bands: tuple[Band, ...], default: Tone) -> Tone:
    for band in bands:
        if value >= band.minimum:
            return band.tone
    return default


def temperature_tone(temp: float) -> Tone:
    return _classify(temp, TEMPERATURE_BANDS, TEMPERATURE_DEFAULT)


def speed_tone(speed: float) -> Tone:
    return _classify(speed, SPEED_BANDS, SPEED_DEFAULT)


def cpu_color(cpu: float) -> str:
    """Accent colour for the CPU ring of the load chart."""
    if cpu >= 75:
        return CPU_HIGH
    if cpu >= 50:
        return CPU_MID
    return CPU_LOW


def status_dot_color(online: bool) -> str:
    return ONLINE_DOT if online else OFFLINE_DOT
