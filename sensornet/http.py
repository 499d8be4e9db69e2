"""Minimal HTTP/1.1 client used to push readings to and pull them from the server."""

from __future__ import annotations

import ipaddress
import logging
import re
import socket
from typing import Optional

logger = logging.getLogger(__name__)

POST_REQUEST_LIMIT = 512
GET_REQUEST_LIMIT = 256
RECV_CHUNK = 511
DEFAULT_TIMEOUT = 10.0

_LINE_BREAKS = re.compile(rb"[\r\n]+")


class HttpError(Exception):
    """Raised when an HTTP exchange cannot be completed."""


def _fit(request: str, limit: int) -> bytes:
    # Requests are built in a fixed buffer that keeps room for a terminator.
    return request.encode("utf-8")[: limit - 1]


def _check_port(port: int) -> int:
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port must be in [0, 65535], got {port}")
    return port


def build_post_request(path: str, host: str, port: int, body: str) -> bytes:
    """Return the bytes of a JSON POST request for ``body``."""
    _check_port(port)
    length = len(body.encode("utf-8"))
    request = (
        f"POST {path} HTTP/1.1\r\n"
        "Content-Type: application/json\r\n"
        f"Host: {host}:{port}\r\n"
        f"Content-Length: {length}\r\n\r\n"
        f"{body}\r\n"
        "\r\n"
    )
    return _fit(request, POST_REQUEST_LIMIT)


def build_get_request(path: str, host: str, port: int) -> bytes:
    """Return the bytes of a GET request that asks the server to close afterwards."""
    _check_port(port)
    request = (
        f"GET {path} HTTP/1.1\r\n"
        f"Host: {host}:{port}\r\n"
        "Connection: close\r\n"
        "\r\n"
    )
    return _fit(request, GET_REQUEST_LIMIT)


def last_line(data: bytes) -> Optional[bytes]:
    """Return the last non-empty line of ``data`` (up to any NUL), or None."""
    text = bytes(data).split(b"\0", 1)[0]
    lines = [line for line in _LINE_BREAKS.split(text) if line]
    return lines[-1] if lines else None


def _connect(host: str, port: int, timeout: float) -> socket.socket:
    try:
        ipaddress.IPv4Address(host)
    except ValueError as exc:
        raise HttpError(f"invalid IPv4 address: {host}") from exc
    _check_port(port)
    try:
        return socket.create_connection((host, port), timeout=timeout)
    except OSError as exc:
        raise HttpError(f"socket connect failed: {exc}") from exc


def http_post(
    host: str, port: int, path: str, body: str, timeout: float = DEFAULT_TIMEOUT
) -> None:
    """Send ``body`` as a JSON POST to ``host:port``; the reply is not read."""
    request = build_post_request(path, host, port, body)
    logger.debug("%s", request.decode("utf-8", errors="replace"))
    with _connect(host, port, timeout) as sock:
        try:
            sock.sendall(request)
        except OSError as exc:
            raise HttpError(f"failed to send HTTP request: {exc}") from exc


def http_get(host: str, port: int, path: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """GET ``path`` and return the last line of the reply, usually its JSON body."""
    request = build_get_request(path, host, port)
    response = b""
    with _connect(host, port, timeout) as sock:
        try:
            sock.sendall(request)
        except OSError as exc:
            raise HttpError(f"failed to send HTTP request: {exc}") from exc
        while True:
            try:
                chunk = sock.recv(RECV_CHUNK)
            except OSError as exc:
                raise HttpError(f"HTTP recv failed: {exc}") from exc
            if not chunk:
                break
            line = last_line(chunk)
            if line is not None:
                response = line
    return response.decode("utf-8", errors="replace")