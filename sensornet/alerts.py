"""Threshold checks that decide when the display should vibrate."""

from __future__ import annotations

from dataclasses import dataclass

from sensornet.packet import Reading


@dataclass(frozen=True)
class Thresholds:
    """Upper limits above which a reading raises an alert."""

    temperature_max: int = 30
    humidity_max: int = 70
    pressure_max: int = 200
    tvoc_max: int = 400
    motion_magnitude_max: int = 10
    light_rgb_max: int = 200


DEFAULT_THRESHOLDS = Thresholds()


def exceeds_thresholds(reading: Reading, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> bool:
    """Return True if any value in ``reading`` is strictly above its limit."""
    if reading.temperature > thresholds.temperature_max:
        return True
    if reading.humidity > thresholds.humidity_max:
        return True
    if reading.pressure > thresholds.pressure_max:
        return True
    if reading.tvoc > thresholds.tvoc_max:
        return True
    motion_squared = reading.accel_x**2 + reading.accel_y**2 + reading.accel_z**2
    if motion_squared > thresholds.motion_magnitude_max**2:
        return True
    return max(reading.r, reading.g, reading.b) > thresholds.light_rgb_max