"""Unit tests for fandash.core.thresholds."""

from __future__ import annotations

import pytest

from fandash.core.thresholds import (
    CPU_HIGH,
    CPU_LOW,
    CPU_MID,
    OFFLINE_DOT,
    ONLINE_DOT,
    Tone,
    cpu_color,
    speed_tone,
    status_dot_color,
    temperature_tone,
)


class TestTemperatureTone:
    @pytest.mark.parametrize("temp, tone", [
        (72, Tone.DANGER),
        (70, Tone.DANGER),
        (55, Tone.WARNING),
        (50, Tone.WARNING),
        (42, Tone.PRIMARY),
        (40, Tone.PRIMARY),
        (39.9, Tone.INFO),
        (20, Tone.INFO),
    ])
    def test_bands(self, temp, tone):
        assert temperature_tone(temp) is tone


class TestSpeedTone:
    @pytest.mark.parametrize("speed, tone", [
        (85, Tone.DANGER),
        (80, Tone.DANGER),
        (30, Tone.SUCCESS),
        (25, Tone.SUCCESS),
        (10, Tone.NEUTRAL),
        (0, Tone.NEUTRAL),
    ])
    def test_bands(self, speed, tone):
        assert speed_tone(speed) is tone


class TestCpuColor:
    def test_high(self):
        assert cpu_color(80) == CPU_HIGH

    def test_boundary_75_is_high(self):
        assert cpu_color(75) == CPU_HIGH

    def test_mid(self):
        assert cpu_color(60) == CPU_MID

    def test_low(self):
        assert cpu_color(30) == CPU_LOW


def test_status_dot_color():
    assert status_dot_color(True) == ONLINE_DOT
    assert status_dot_color(False) == OFFLINE_DOT
