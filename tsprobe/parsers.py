"""Parsing of ``a.b.c.d:port.pid`` stream addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .ts import MAX_PID

_DEC = r"\s*([+-]?\d+)"
_ADDR = _DEC + r"\." + _DEC + r"\." + _DEC + r"\." + _DEC + ":" + _DEC
_UDP_RE = re.compile(r"udp://([^:]{1,99}):" + _DEC)
_HEX_RE = re.compile(_ADDR + r"\.0x\s*([0-9a-fA-F]+)")
_DEC_RE = re.compile(_ADDR + r"\." + _DEC)


class ParseError(ValueError):
    """Raised when an address/port/pid string cannot be parsed."""


@dataclass(frozen=True)
class IpPid:
    """A stream address with an optional PID and its display forms."""

    address: str
    port: int
    pid: int
    ui_address_ip: str
    ui_address_ip_pid: str
    digits: tuple[int, ...] = ()


def _valid(digits: tuple[int, ...], port: int, pid: int) -> bool:
    return (
        all(0 <= d <= 255 for d in digits)
        and 0 < port <= 65535
        and 0 < pid <= MAX_PID
    )


def parse_ippid(text: str) -> IpPid:
    """Parse ``udp://host:port``, ``a.b.c.d:port.0xpid`` or ``a.b.c.d:port.pid``."""
    match = _UDP_RE.match(text)
    if match:
        address = match.group(1)
        port = int(match.group(2))
        return IpPid(
            address=address,
            port=port,
            pid=0,
            ui_address_ip=f"{address}:{port}",
            ui_address_ip_pid=f"{address}:{port}.0x0",
        )

    for pattern, hex_pid in ((_HEX_RE, True), (_DEC_RE, False)):
        match = pattern.match(text)
        if not match:
            continue
        groups = match.groups()
        digits = tuple(int(g) for g in groups[:4])
        port = int(groups[4])
        pid = int(groups[5], 16) if hex_pid else int(groups[5])
        if not _valid(digits, port, pid):
            continue
        address = ".".join(str(d) for d in digits)
        pid_text = f"0x{pid:x}" if hex_pid else str(pid)
        return IpPid(
            address=address,
            port=port,
            pid=pid,
            ui_address_ip=f"{address}:{port}",
            ui_address_ip_pid=f"{address}:{port}.{pid_text}",
            digits=digits,
        )

    raise ParseError(f"cannot parse address {text!r}")