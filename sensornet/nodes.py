"""Registry of nodes seen by the gateway and their last timestamps."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator

UUID_LEN = 4


class NodeStatus(enum.Enum):
    """Outcome of looking up a node with a timestamp."""

    MATCH = 0
    UNKNOWN = -1
    STALE = -2


@dataclass
class _Node:
    uuid: bytes
    timestamp: int


def _check_uuid(uuid: bytes) -> bytes:
    uuid = bytes(uuid)
    if len(uuid) != UUID_LEN:
        raise ValueError(f"uuid must be {UUID_LEN} bytes, got {len(uuid)}")
    return uuid


def _check_timestamp(timestamp: int) -> int:
    if not 0 <= timestamp <= 0xFFFF:
        raise ValueError(f"timestamp must be in [0, 65535], got {timestamp}")
    return timestamp


class NodeList:
    """Ordered list of (uuid, timestamp) entries; duplicates are permitted."""

    def __init__(self) -> None:
        self._nodes: list[_Node] = []

    def add(self, uuid: bytes, timestamp: int) -> None:
        """Append a node with its timestamp."""
        self._nodes.append(_Node(_check_uuid(uuid), _check_timestamp(timestamp)))

    def remove(self, uuid: bytes) -> None:
        """Remove the first node with ``uuid``; raise KeyError if absent."""
        uuid = _check_uuid(uuid)
        for node in self._nodes:
            if node.uuid == uuid:
                self._nodes.remove(node)
                return
        raise KeyError(uuid)

    def check(self, uuid: bytes, timestamp: int) -> NodeStatus:
        """Compare ``timestamp`` with the first entry recorded for ``uuid``."""
        uuid = _check_uuid(uuid)
        for node in self._nodes:
            if node.uuid == uuid:
                return NodeStatus.MATCH if node.timestamp == timestamp else NodeStatus.STALE
        return NodeStatus.UNKNOWN

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[tuple[bytes, int]]:
        return ((node.uuid, node.timestamp) for node in self._nodes)