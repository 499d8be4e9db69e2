# sensornet

Tools for a small environmental sensor network. Mobile nodes broadcast
compact advertisement payloads. Each payload carries pressure, humidity,
temperature, RGB light, TVOC and acceleration values. A gateway decodes the
payloads and posts them as JSON to an HTTP collector. A dashboard reads the
latest reading back from the collector and shows it as text.

The package uses only the standard library.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Payloads (`sensornet.packet`)

```python
from sensornet.packet import Reading, encode_payload, decode_advertisement

reading = Reading(timestamp=7, pressure=101, humidity=45, temperature=22,
                  r=10, g=20, b=30, tvoc=120,
                  accel_x=1, accel_y=-2, accel_z=9)
payload = encode_payload(reading, b"AB12")
```

- `Reading` checks the width of each field when it is created:
  - `timestamp` and `tvoc` take 0–65535.
  - `pressure`, `humidity`, `temperature`, `r`, `g` and `b` take 0–255.
  - The three `accel_*` values take −128–127.
  - A value out of range raises `ValueError`. A value that is not an integer raises `TypeError`.
- `encode_payload(reading, uuid)` returns the 21-byte manufacturer-data payload: the network prefix, the 4-byte node UUID and the little-endian fields.
- `decode_advertisement(data)` takes the raw advertising data that a scanner receives. This is a 5-byte AD header followed by the payload. It returns an `Advertisement` with `header`, `uuid` and `reading`. It returns `None` when the data is too short or the prefix does not match.
- `LatestQueue(maxsize)` is a thread-safe bounded FIFO:
  - `put` clears everything queued if the queue is full, then appends the new item.
  - `get` raises `queue.Empty` when nothing is queued.
  - `purge` discards all queued items.

## Node registry (`sensornet.nodes`)

`NodeList` is an ordered list of `(uuid, timestamp)` entries.

- `add` appends an entry.
- `remove` removes the first entry for a UUID, or raises `KeyError`.
- `check(uuid, timestamp)` returns a `NodeStatus`:
  - `MATCH` when the recorded timestamp is the same.
  - `STALE` when the node is recorded with a different timestamp.
  - `UNKNOWN` when the node is not recorded.

## Sampling (`sensornet.sampling`)

- `truncate_u8`, `truncate_u16` and `truncate_i8` truncate a number toward zero and wrap it into the field width. A non-finite float raises `ValueError`.
- `light_to_lux(raw)` scales a raw 16-bit colour count by 0.4 in single precision and keeps 8 bits.
- `LightSample.to_lux()` applies `light_to_lux` to all four channels.
- `Sampler.next_reading(pressure, humidity, temperature, tvoc, accel, light)` builds a `Reading` stamped with a counter. The counter wraps at 16 bits.

## Alerts (`sensornet.alerts`)

`exceeds_thresholds(reading, thresholds)` returns `True` if any value is strictly above its limit. The default `Thresholds()` limits are:

| Value | Limit |
| --- | --- |
| temperature | 30 |
| humidity | 70 |
| pressure | 200 |
| TVOC | 400 |
| motion magnitude, compared as squared | 10 |
| any light channel | 200 |

## HTTP (`sensornet.http`)

- `build_post_request` and `build_get_request` return the raw request bytes.
- `http_post(host, port, path, body)` sends a JSON POST and does not read the reply.
- `http_get(host, port, path)` returns the last non-empty line of the reply, which is usually the JSON body.
- The host must be an IPv4 address.
- Failures raise `HttpError`.

## Gateway (`sensornet.gateway`)

`Gateway(host, port, post)` forwards a reading only when its node is new or its timestamp has changed. `handle(data)` returns the JSON body that it posted, or `None` if it skipped the packet. `reading_to_json` gives that body: an object whose values are all strings.

```
sensornet-gateway [--host HOST] [--port PORT] [--input FILE]
```

The command reads hex-encoded advertising data, one packet per line, from standard input or `--input`. It posts each new reading to `/reading` on the collector. The default collector is `192.168.0.49:3000`.

## Dashboard (`sensornet.display`)

- `parse_sensor_json(text)` reads the collector's JSON answer into `(uuid, Reading)`. It raises `ValueError` when the JSON is malformed or incomplete.
- `magnitude_bar(x, y, z)` returns the squared acceleration magnitude divided by 50, capped at 20.
- `Dashboard` holds the state of a three-tile display: environment, motion and light.
  - `update(reading)` sets the label texts and the bar value, and returns whether the reading exceeds the alert thresholds.
  - `tap(now_ms)` moves to the next tile. Taps within 50 ms of the last accepted tap are ignored.
  - `labels()` returns the current texts.

```
sensornet-display [--host HOST] [--port PORT] [--uuid UUID] [--interval SECONDS] [--count N]
```

The command polls `/device/<uuid>` and prints the labels on one line for each reading. It logs a warning when a reading exceeds the thresholds.

## What it does not do

- It does not scan for radio advertisements and does not broadcast any. The gateway takes advertising data as hex text.
- It does not read sensor hardware. `Sampler` converts values that you pass to it.
- It does not manage Wi-Fi connections.
- The dashboard has no graphical screen and no vibration motor. It keeps label text and an alert flag, and prints the labels.

## Tests

```
pytest
```