"""Dashboard state for the hand-held display: labels, tile paging and alerts."""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import threading
import time
from typing import Callable, Optional, Sequence

from sensornet.alerts import DEFAULT_THRESHOLDS, exceeds_thresholds
from sensornet.http import HttpError, http_get
from sensornet.packet import Reading
from sensornet.sampling import truncate_i8, truncate_u8, truncate_u16

logger = logging.getLogger(__name__)

SERVER_IP = "192.168.0.49"
SERVER_PORT = 3000
DEVICE_UUID = "AB12"
POLL_INTERVAL_S = 5.0

NUM_TILES = 3
DEBOUNCE_MS = 50
BAR_MAX = 20
BAR_DIVISOR = 50

_INT32 = (-(2**31), 2**31 - 1)
_UINT64_MAX = 2**64 - 1

_NUMBER_FIELDS: tuple[tuple[str, Callable[[float], int]], ...] = (
    ("pressure", truncate_u8),
    ("humidity", truncate_u8),
    ("temperature", truncate_u8),
    ("r", truncate_u8),
    ("g", truncate_u8),
    ("b", truncate_u8),
    ("tvoc", truncate_u16),
    ("accel_x", truncate_i8),
    ("accel_y", truncate_i8),
    ("accel_z", truncate_i8),
)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_sensor_json(text: str) -> tuple[str, Reading]:
    """Parse the server's JSON reading into ``(uuid, reading)``.

    Numeric fields are stored into their field width, wrapping like a C cast.
    Raises ValueError for malformed JSON, missing fields or wrong types.
    """
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise ValueError("sensor JSON must be an object")

    uuid = obj.get("uuid")
    if not isinstance(uuid, str):
        raise ValueError("uuid must be a string")

    timestamp = obj.get("timestamp")
    if not _is_int(timestamp) or not 0 <= timestamp <= _UINT64_MAX:
        raise ValueError(f"timestamp must be an unsigned integer, got {timestamp!r}")

    values: dict[str, int] = {}
    low, high = _INT32
    for name, store in _NUMBER_FIELDS:
        value = obj.get(name)
        if not _is_int(value):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if not low <= value <= high:
            raise ValueError(f"{name} out of 32-bit range: {value}")
        values[name] = store(value)

    return uuid, Reading(timestamp=timestamp, **values)


def magnitude_bar(x: int, y: int, z: int) -> int:
    """Return the acceleration bar value: squared magnitude / 50, capped at 20."""
    return min((x * x + y * y + z * z) // BAR_DIVISOR, BAR_MAX)


class Dashboard:
    """Text of every value label, the magnitude bar and the visible tile."""

    def __init__(self) -> None:
        self.thresholds = DEFAULT_THRESHOLDS
        self.current_tile = 0
        self.last_click_ms = 0
        self.bar_value = 0
        self.alerting = False
        self._tap_lock = threading.Lock()
        self._labels = {
            "temperature": "-- °C",
            "humidity": "-- %RH",
            "pressure": "-- hPa",
            "tvoc": "-- ppb",
            "accel_x": "X: -- g",
            "accel_y": "Y: -- g",
            "accel_z": "Z: -- g",
            "r": "R: --",
            "g": "G: --",
            "b": "B: --",
        }

    def update(self, reading: Reading) -> bool:
        """Show ``reading``; return whether it exceeds the alert thresholds."""
        self._labels.update(
            temperature=f"{reading.temperature} °C",
            humidity=f"{reading.humidity} %RH",
            pressure=f"{reading.pressure} hPa",
            tvoc=f"{reading.tvoc} ppb",
            accel_x=f"X: {reading.accel_x}",
            accel_y=f"Y: {reading.accel_y}",
            accel_z=f"Z: {reading.accel_z}",
            r=f"R: {reading.r}",
            g=f"G: {reading.g}",
            b=f"B: {reading.b}",
        )
        self.bar_value = magnitude_bar(reading.accel_x, reading.accel_y, reading.accel_z)
        self.alerting = exceeds_thresholds(reading, self.thresholds)
        return self.alerting

    def tap(self, now_ms: int) -> int:
        """Advance to the next tile unless the tap is within the debounce window."""
        if not self._tap_lock.acquire(blocking=False):
            return self.current_tile
        try:
            now_ms &= 0xFFFFFFFF
            if (now_ms - self.last_click_ms) & 0xFFFFFFFF < DEBOUNCE_MS:
                return self.current_tile
            self.last_click_ms = now_ms
            self.current_tile = (self.current_tile + 1) % NUM_TILES
            return self.current_tile
        finally:
            self._tap_lock.release()

    def labels(self) -> dict[str, str]:
        """Return a copy of the label texts keyed by field name."""
        return dict(self._labels)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Poll the server for a device's latest reading and print the dashboard."""
    parser = argparse.ArgumentParser(description="Show the latest reading of a sensor node.")
    parser.add_argument("--host", default=SERVER_IP)
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--uuid", default=DEVICE_UUID)
    parser.add_argument("--interval", type=float, default=POLL_INTERVAL_S)
    parser.add_argument("--count", type=int, default=None, help="stop after this many polls")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    dashboard = Dashboard()
    path = f"/device/{args.uuid}"
    polls = itertools.count() if args.count is None else range(args.count)
    for index in polls:
        if index:
            time.sleep(args.interval)
        try:
            response = http_get(args.host, args.port, path)
        except HttpError as exc:
            logger.error("HTTP GET failed: %s", exc)
            continue
        try:
            _, reading = parse_sensor_json(response)
        except ValueError as exc:
            logger.error("JSON parse failed: %s", exc)
            continue
        if dashboard.update(reading):
            logger.warning("Thresholds exceeded")
        print(" | ".join(dashboard.labels().values()), flush=True)
    return 0