import json
import socket
import threading

import pytest

from sensornet.display import Dashboard, magnitude_bar, main, parse_sensor_json
from sensornet.packet import Reading


def _payload(**overrides):
    data = {
        "uuid": "AB12",
        "timestamp": 7,
        "pressure": 100,
        "humidity": 40,
        "temperature": 21,
        "r": 10,
        "g": 20,
        "b": 30,
        "tvoc": 150,
        "accel_x": -5,
        "accel_y": 3,
        "accel_z": 2,
    }
    data.update(overrides)
    return data


def _reading(**overrides):
    fields = _payload(**overrides)
    del fields["uuid"]
    return Reading(**fields)


def test_parse_sensor_json_valid():
    uuid, reading = parse_sensor_json(json.dumps(_payload()))
    assert uuid == "AB12"
    assert reading == _reading()


def test_parse_sensor_json_wraps_to_field_width():
    _, base = parse_sensor_json(json.dumps(_payload()))
    _, wrapped = parse_sensor_json(
        json.dumps(_payload(pressure=100 + 256, tvoc=150 + 65536, accel_x=-5 + 256))
    )
    assert wrapped == base


def test_parse_sensor_json_malformed():
    with pytest.raises(ValueError):
        parse_sensor_json("{not json")


def test_parse_sensor_json_missing_field():
    data = _payload()
    del data["humidity"]
    with pytest.raises(ValueError):
        parse_sensor_json(json.dumps(data))


def test_parse_sensor_json_rejects_non_integer():
    with pytest.raises(ValueError):
        parse_sensor_json(json.dumps(_payload(temperature="21")))


def test_parse_sensor_json_rejects_non_object():
    with pytest.raises(ValueError):
        parse_sensor_json("[1, 2, 3]")


def test_magnitude_bar_zero_and_cap():
    assert magnitude_bar(0, 0, 0) == 0
    assert magnitude_bar(127, 127, 127) == 20
    assert magnitude_bar(-128, 0, 0) == 20


def test_magnitude_bar_example():
    assert magnitude_bar(10, 0, 0) == 2


def test_magnitude_bar_is_monotonic_and_bounded():
    values = [magnitude_bar(x, 0, 0) for x in range(0, 128)]
    assert values == sorted(values)
    assert all(0 <= v <= 20 for v in values)


def test_dashboard_initial_labels():
    dash = Dashboard()
    labels = dash.labels()
    assert labels["temperature"] == "-- °C"
    assert labels["humidity"] == "-- %RH"
    assert labels["pressure"] == "-- hPa"
    assert labels["tvoc"] == "-- ppb"
    assert labels["accel_x"] == "X: -- g"
    assert labels["r"] == "R: --"
    assert dash.bar_value == 0
    assert dash.current_tile == 0


def test_dashboard_update_sets_labels_and_bar():
    dash = Dashboard()
    reading = _reading()
    alert = dash.update(reading)
    labels = dash.labels()
    assert labels["temperature"] == "21 °C"
    assert labels["humidity"] == "40 %RH"
    assert labels["pressure"] == "100 hPa"
    assert labels["tvoc"] == "150 ppb"
    assert labels["accel_x"] == "X: -5"
    assert labels["accel_y"] == "Y: 3"
    assert labels["b"] == "B: 30"
    assert dash.bar_value == magnitude_bar(-5, 3, 2)
    assert alert is False
    assert dash.alerting is False


def test_dashboard_update_reports_alert():
    dash = Dashboard()
    assert dash.update(_reading(temperature=31)) is True
    assert dash.alerting is True
    assert dash.update(_reading()) is False


def test_labels_returns_copy():
    dash = Dashboard()
    labels = dash.labels()
    labels["temperature"] = "changed"
    assert dash.labels()["temperature"] == "-- °C"


def test_tap_debounce_and_cycle():
    dash = Dashboard()
    assert dash.tap(10) == 0
    assert dash.tap(100) == 1
    assert dash.tap(120) == 1
    assert dash.tap(200) == 2
    assert dash.tap(300) == 0
    assert dash.current_tile == 0


def _serve_once(body):
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    server.settimeout(5)
    port = server.getsockname()[1]

    def run():
        try:
            conn, _ = server.accept()
            with conn:
                conn.recv(1024)
                conn.sendall(
                    b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n\r\n"
                    + body.encode("utf-8")
                )
        finally:
            server.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread


def test_main_polls_and_prints(capsys):
    port, thread = _serve_once(json.dumps(_payload()))
    rc = main(["--host", "127.0.0.1", "--port", str(port), "--count", "1", "--interval", "0"])
    thread.join(timeout=5)
    out = capsys.readouterr().out
    assert rc == 0
    assert "21 °C" in out
    assert "X: -5" in out


def test_main_survives_connection_failure(capsys):
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    rc = main(["--host", "127.0.0.1", "--port", str(port), "--count", "1", "--interval", "0"])
    assert rc == 0
    assert capsys.readouterr().out == ""