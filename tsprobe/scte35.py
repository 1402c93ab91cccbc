"""Console rendering of SCTE-35 splice information sections."""

from __future__ import annotations

_BYTES_PER_ROW = 16
_ROW_LEAD = "\n  -> "


def format_section_dump(data: bytes) -> str:
    """Render a section as hex rows of 16 bytes, each row introduced by ``  -> ``.

    The text begins with a newline, ends with a newline, and gains one more
    blank line when the last row is partial.
    """
    parts = []
    for index, byte in enumerate(data):
        if index % _BYTES_PER_ROW == 0:
            parts.append(_ROW_LEAD)
        parts.append(f"{byte:02x} ")
    parts.append("\n")
    if len(data) % _BYTES_PER_ROW:
        parts.append("\n")
    return "".join(parts)


def trigger_banner(number: int) -> str:
    """The separator line printed before each SCTE-35 trigger."""
    return f"<-- Trigger {number} --------------------------------------------------->"