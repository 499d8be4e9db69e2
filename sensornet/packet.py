"""Sensor reading payload layout, advertisement decoding and a latest-value queue."""

from __future__ import annotations

import struct
import threading
from collections import deque
from dataclasses import dataclass
from queue import Empty
from typing import Deque, Generic, Optional, TypeVar

PREFIX = bytes((0xA3, 0xF9, 0xC2, 0xB7))
UUID_LEN = 4
ADVERTISE_MS = 5000

_PAYLOAD = struct.Struct("<4s4sHBBBBBBHbbb")
PAYLOAD_LEN = _PAYLOAD.size
# Flags AD structure (3 bytes) plus the manufacturer-data length and type bytes.
AD_HEADER_LEN = 5
ADVERTISEMENT_LEN = AD_HEADER_LEN + PAYLOAD_LEN

_U8 = (0, 0xFF)
_U16 = (0, 0xFFFF)
_I8 = (-0x80, 0x7F)


def _check_range(name: str, value: int, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}")


def _check_uuid(uuid: bytes) -> bytes:
    uuid = bytes(uuid)
    if len(uuid) != UUID_LEN:
        raise ValueError(f"uuid must be {UUID_LEN} bytes, got {len(uuid)}")
    return uuid


@dataclass(frozen=True)
class Reading:
    """One set of sensor values as carried in an advertisement."""

    timestamp: int
    pressure: int
    humidity: int
    temperature: int
    r: int
    g: int
    b: int
    tvoc: int
    accel_x: int
    accel_y: int
    accel_z: int

    def __post_init__(self) -> None:
        _check_range("timestamp", self.timestamp, _U16)
        for name in ("pressure", "humidity", "temperature", "r", "g", "b"):
            _check_range(name, getattr(self, name), _U8)
        _check_range("tvoc", self.tvoc, _U16)
        for name in ("accel_x", "accel_y", "accel_z"):
            _check_range(name, getattr(self, name), _I8)


@dataclass(frozen=True)
class Advertisement:
    """A decoded advertisement: AD header bytes, node identifier and reading."""

    header: bytes
    uuid: bytes
    reading: Reading


def encode_payload(reading: Reading, uuid: bytes) -> bytes:
    """Return the manufacturer-data payload for a reading from node ``uuid``."""
    uuid = _check_uuid(uuid)
    return _PAYLOAD.pack(
        PREFIX,
        uuid,
        reading.timestamp,
        reading.pressure,
        reading.humidity,
        reading.temperature,
        reading.r,
        reading.g,
        reading.b,
        reading.tvoc,
        reading.accel_x,
        reading.accel_y,
        reading.accel_z,
    )


def decode_advertisement(data: bytes) -> Optional[Advertisement]:
    """Decode raw advertising data; return None for short or foreign packets."""
    data = bytes(data)
    if len(data) < ADVERTISEMENT_LEN:
        return None
    header = data[:AD_HEADER_LEN]
    prefix, uuid, *fields = _PAYLOAD.unpack(data[AD_HEADER_LEN:ADVERTISEMENT_LEN])
    if prefix != PREFIX:
        return None
    return Advertisement(header=header, uuid=uuid, reading=Reading(*fields))


T = TypeVar("T")


class LatestQueue(Generic[T]):
    """Bounded FIFO that drops everything queued when a put finds it full."""

    def __init__(self, maxsize: int) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()

    def put(self, item: T) -> None:
        """Queue ``item``, purging older items first if the queue is full."""
        with self._lock:
            if len(self._items) >= self.maxsize:
                self._items.clear()
            self._items.append(item)

    def get(self) -> T:
        """Remove and return the oldest item; raise queue.Empty if none."""
        with self._lock:
            if not self._items:
                raise Empty
            return self._items.popleft()

    def purge(self) -> None:
        """Discard all queued items."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)