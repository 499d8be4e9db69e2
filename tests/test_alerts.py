import pytest

from sensornet.alerts import Thresholds, exceeds_thresholds
from sensornet.packet import Reading


def calm(**overrides):
    values = dict(
        timestamp=0,
        pressure=100,
        humidity=40,
        temperature=20,
        r=50,
        g=50,
        b=50,
        tvoc=100,
        accel_x=0,
        accel_y=0,
        accel_z=0,
    )
    values.update(overrides)
    return Reading(**values)


def test_calm_reading_passes():
    assert exceeds_thresholds(calm()) is False


def test_default_limits():
    t = Thresholds()
    assert (t.temperature_max, t.humidity_max, t.pressure_max) == (30, 70, 200)
    assert (t.tvoc_max, t.motion_magnitude_max, t.light_rgb_max) == (400, 10, 200)


@pytest.mark.parametrize(
    "field,limit",
    [
        ("temperature", 30),
        ("humidity", 70),
        ("pressure", 200),
        ("tvoc", 400),
        ("r", 200),
        ("g", 200),
        ("b", 200),
    ],
)
def test_limits_are_strict(field, limit):
    assert exceeds_thresholds(calm(**{field: limit})) is False
    assert exceeds_thresholds(calm(**{field: limit + 1})) is True


def test_motion_magnitude_boundary():
    assert exceeds_thresholds(calm(accel_x=10)) is False
    assert exceeds_thresholds(calm(accel_x=-10)) is False
    assert exceeds_thresholds(calm(accel_x=10, accel_y=1)) is True


def test_motion_combines_axes():
    assert exceeds_thresholds(calm(accel_x=6, accel_y=6, accel_z=6)) is True
    assert exceeds_thresholds(calm(accel_x=5, accel_y=5, accel_z=5)) is False


def test_custom_thresholds():
    strict = Thresholds(temperature_max=10)
    assert exceeds_thresholds(calm(temperature=11), strict) is True
    assert exceeds_thresholds(calm(temperature=11)) is False