"""Ancillary-data payload helpers: Evertz serial embedding and SMPTE 12-2 timecodes."""

from __future__ import annotations

EVERTZ_MARKER = 0x18
EVERTZ_HEADER = 4


class EvertzError(ValueError):
    """Raised for a packet that is not a valid Evertz 7721DE4 serial packet."""


def parse_evertz_serial(data: bytes) -> bytes | None:
    """Return the serial bytes carried for port 0, or None if there are none for it."""
    if len(data) < EVERTZ_HEADER:
        raise EvertzError(f"Invalid Evertz packet (length={len(data)})")
    if data[0] != EVERTZ_MARKER:
        head = " ".join(f"{b:02x}" for b in data[:EVERTZ_HEADER])
        raise EvertzError(f"Invalid Evertz packet {head}")
    if data[1] & 0x03:
        return None
    if len(data) == EVERTZ_HEADER:
        return None
    return bytes(data[EVERTZ_HEADER:])


def format_smpte_timecode(hours: int, minutes: int, seconds: int, frames: int) -> str:
    """Render a timecode as the one-line JSON object printed for each SMPTE 12-2 packet."""
    return (
        f'{{ "smpte_timecode" : "{hours:02d}:{minutes:02d}:{seconds:02d}:{frames:02d}" }}'
    )