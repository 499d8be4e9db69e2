"""Conversion of raw sensor values into the integer fields of a reading."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from sensornet.packet import Reading

BH1745_I2C_ADDR = 0x38
BH1745_REG_RED = 0x50
BH1745_REG_GREEN = 0x52
BH1745_REG_BLUE = 0x54
BH1745_REG_WHITE = 0x56
REG_SYS_CTRL = 0x40
REG_MODECTL1 = 0x41
REG_MODECTL2 = 0x42
REG_MODECTL3 = 0x44


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


_LUX_FACTOR = _f32(0.4)


def _trunc(value: float) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"cannot convert {value!r} to an integer")
    return int(value)


def truncate_u8(value: float) -> int:
    """Truncate toward zero and wrap into an unsigned 8-bit value."""
    return _trunc(value) & 0xFF


def truncate_u16(value: float) -> int:
    """Truncate toward zero and wrap into an unsigned 16-bit value."""
    return _trunc(value) & 0xFFFF


def truncate_i8(value: float) -> int:
    """Truncate toward zero and wrap into a signed 8-bit value."""
    wrapped = _trunc(value) & 0xFF
    return wrapped - 0x100 if wrapped >= 0x80 else wrapped


def light_to_lux(raw: int) -> int:
    """Convert a raw 16-bit colour count to the 8-bit lux value that is sent."""
    if not 0 <= raw <= 0xFFFF:
        raise ValueError(f"raw light count must be in [0, 65535], got {raw}")
    return truncate_u8(_f32(raw * _LUX_FACTOR))


@dataclass(frozen=True)
class LightSample:
    """Red, green, blue and white channel values from the colour sensor."""

    r: int
    g: int
    b: int
    w: int

    def to_lux(self) -> "LightSample":
        """Return the sample with each channel converted by light_to_lux."""
        return LightSample(
            light_to_lux(self.r),
            light_to_lux(self.g),
            light_to_lux(self.b),
            light_to_lux(self.w),
        )


class Sampler:
    """Builds numbered readings from sensor values; the counter wraps at 16 bits."""

    def __init__(self) -> None:
        self.counter = 0

    def next_reading(
        self,
        pressure: float,
        humidity: float,
        temperature: float,
        tvoc: float,
        accel: tuple[float, float, float],
        light: LightSample,
    ) -> Reading:
        """Return a reading stamped with the current counter, then advance it."""
        accel_x, accel_y, accel_z = accel
        reading = Reading(
            timestamp=self.counter,
            pressure=truncate_u8(pressure),
            humidity=truncate_u8(humidity),
            temperature=truncate_u8(temperature),
            r=truncate_u8(light.r),
            g=truncate_u8(light.g),
            b=truncate_u8(light.b),
            tvoc=truncate_u16(tvoc),
            accel_x=truncate_i8(accel_x),
            accel_y=truncate_i8(accel_y),
            accel_z=truncate_i8(accel_z),
        )
        self.counter = (self.counter + 1) & 0xFFFF
        return reading