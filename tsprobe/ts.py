"""Helpers for ISO 13818-1 transport stream packets."""

from __future__ import annotations

import re
from typing import Iterator

PACKET_SIZE = 188
SYNC_BYTE = 0x47
MAX_PID = 0x1FFF

_HEX_PID = re.compile(r"0x([0-9a-fA-F]+)")


def packet_pid(packet: bytes) -> int:
    """Return the 13-bit PID carried in a transport packet header."""
    if len(packet) < 3:
        raise ValueError("transport packet too short to hold a PID")
    return ((packet[1] & 0x1F) << 8) | packet[2]


def iter_packets(data: bytes) -> Iterator[bytes]:
    """Yield each complete 188-byte packet in ``data``; a partial tail is ignored."""
    view = memoryview(data)
    for start in range(0, len(view) - PACKET_SIZE + 1, PACKET_SIZE):
        yield bytes(view[start:start + PACKET_SIZE])


def packets_on_pid(data: bytes, pid: int) -> Iterator[bytes]:
    """Yield the complete packets in ``data`` that belong to ``pid``."""
    return (packet for packet in iter_packets(data) if packet_pid(packet) == pid)


def parse_hex_pid(text: str, limit: int = MAX_PID) -> int:
    """Parse a value written as ``0xNNNN`` and check it does not exceed ``limit``."""
    match = _HEX_PID.match(text)
    if match is None:
        raise ValueError(f"expected a value of the form 0xNNNN, got {text!r}")
    value = int(match.group(1), 16)
    if value > limit:
        raise ValueError(f"value 0x{value:x} exceeds limit 0x{limit:x}")
    return value


def hexdump(data: bytes, per_row: int = 16) -> str:
    """Render bytes as lower-case hex, ``per_row`` bytes to a line, ending in a blank line."""
    if per_row <= 0:
        raise ValueError("per_row must be positive")
    parts = [
        f"{byte:02x}{' ' if index % per_row else chr(10)}"
        for index, byte in enumerate(data, 1)
    ]
    return "".join(parts) + "\n"