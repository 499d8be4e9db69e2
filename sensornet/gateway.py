"""Base station: turns received advertisements into JSON posts to the server."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Optional, Sequence

from sensornet.http import HttpError, http_post
from sensornet.nodes import NodeList, NodeStatus
from sensornet.packet import Advertisement, decode_advertisement

logger = logging.getLogger(__name__)

TARGET_IP = "192.168.0.49"
TARGET_PORT = 3000
READING_PATH = "/reading"

PostFunc = Callable[[str, int, str, str], None]


def reading_to_json(advertisement: Advertisement) -> str:
    """Encode an advertisement as the JSON object the server expects (all strings)."""
    reading = advertisement.reading
    uuid = advertisement.uuid.split(b"\0", 1)[0].decode("latin-1")
    fields = {
        "uuid": uuid,
        "timestamp": str(reading.timestamp),
        "pressure": str(reading.pressure),
        "humidity": str(reading.humidity),
        "temperature": str(reading.temperature),
        "r": str(reading.r),
        "g": str(reading.g),
        "b": str(reading.b),
        "tvoc": str(reading.tvoc),
        "accel_x": str(reading.accel_x),
        "accel_y": str(reading.accel_y),
        "accel_z": str(reading.accel_z),
    }
    return json.dumps(fields, separators=(",", ":"), ensure_ascii=False)


class Gateway:
    """Forwards each new reading from each node once."""

    def __init__(
        self, host: str = TARGET_IP, port: int = TARGET_PORT, post: PostFunc = http_post
    ) -> None:
        self.host = host
        self.port = port
        self.post = post
        self.nodes = NodeList()

    def handle(self, data: bytes) -> Optional[str]:
        """Process raw advertising data; return the JSON forwarded, or None if skipped."""
        advertisement = decode_advertisement(data)
        if advertisement is None:
            return None
        uuid = advertisement.uuid
        timestamp = advertisement.reading.timestamp
        status = self.nodes.check(uuid, timestamp)
        if status is NodeStatus.MATCH:
            return None
        if status is NodeStatus.STALE:
            self.nodes.remove(uuid)
        self.nodes.add(uuid, timestamp)

        body = reading_to_json(advertisement)
        logger.info("%s", body)
        try:
            self.post(self.host, self.port, READING_PATH, body)
        except HttpError as exc:
            logger.error("Error sending HTTP %s", exc)
        else:
            logger.info("Data sent successfully")
        return body


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read hex-encoded advertisements, one per line, and forward them."""
    parser = argparse.ArgumentParser(description="Forward sensor advertisements to a server.")
    parser.add_argument("--host", default=TARGET_IP)
    parser.add_argument("--port", type=int, default=TARGET_PORT)
    parser.add_argument(
        "--input",
        type=argparse.FileType("r"),
        default=sys.stdin,
        help="file of hex-encoded advertising data, one packet per line",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    gateway = Gateway(args.host, args.port)
    with args.input as stream:
        for line in stream:
            text = line.strip()
            if not text:
                continue
            try:
                data = bytes.fromhex(text)
            except ValueError:
                logger.warning("Skipping malformed line: %s", text)
                continue
            gateway.handle(data)
    return 0