"""Remove transport packets from a file by PID."""

from __future__ import annotations

import getopt
import re
import sys
from typing import BinaryIO

from .ts import PACKET_SIZE, iter_packets, packet_pid, parse_hex_pid

ALL_PIDS = 0x2000
_PID_COUNT = 0x2000
_READ_SIZE = PACKET_SIZE * 32


class PidFilter:
    """A pass/drop decision for each of the 8192 PIDs; everything passes initially."""

    def __init__(self) -> None:
        self._blocked: set[int] = set()

    @staticmethod
    def _check(pid: int) -> None:
        if not 0 <= pid <= ALL_PIDS:
            raise ValueError(f"pid 0x{pid:x} out of range")

    def remove(self, pid: int) -> None:
        """Drop ``pid``; 0x2000 drops every PID."""
        self._check(pid)
        if pid == ALL_PIDS:
            self._blocked = set(range(_PID_COUNT))
        else:
            self._blocked.add(pid)

    def add(self, pid: int) -> None:
        """Pass ``pid``; 0x2000 passes every PID."""
        self._check(pid)
        if pid == ALL_PIDS:
            self._blocked.clear()
        else:
            self._blocked.discard(pid)

    def passes(self, pid: int) -> bool:
        return pid not in self._blocked

    def dropped(self) -> list[int]:
        """The dropped PIDs in ascending order."""
        return sorted(self._blocked)


def filter_stream(src: BinaryIO, dst: BinaryIO, pid_filter: PidFilter) -> tuple[int, int]:
    """Copy the packets that pass ``pid_filter``; return (packets read, packets written)."""
    total = written = 0
    pending = b""
    while True:
        chunk = src.read(_READ_SIZE)
        if not chunk:
            break
        pending += chunk
        usable = len(pending) - len(pending) % PACKET_SIZE
        for packet in iter_packets(pending[:usable]):
            total += 1
            if pid_filter.passes(packet_pid(packet)):
                dst.write(packet)
                written += 1
        pending = pending[usable:]
    return total, written


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _usage() -> None:
    print("A tool to drop packets from an ISO13818 MPEGTS file, by pid.")
    print("Input file is assumed to be properly packet aligned.")
    print("Usage:")
    print("  -i <input.ts>")
    print("  -o <output.ts>")
    print("  -R pid 0xNNNN to be removed [def: none], multiple -R instances supported. [0x2000 all pids]")
    print("  -A pid 0xNNNN to be added [def: 0x2000], multiple -A instances supported. [0x2000 all pids]")
    print("Examples:")
    print("    -i input.ts -o output.ts -R 0x2000 -A 0x31       - output only pids 0x31 and 0x32")
    print("    -i input.ts -o output.ts -R 0x1fff -R 0x32       - output all pids except 0x1fff and 0x32")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    try:
        opts, _ = getopt.getopt(args, "?fhi:n:o:p:R:A:")
    except getopt.GetoptError:
        _usage()
        raise SystemExit(1)

    pid_filter = PidFilter()
    ifn = ofn = None
    pid = 0
    do_fixups = False
    drop_count = drop_position = 0

    for opt, value in opts:
        if opt == "-f":
            do_fixups = True
        elif opt == "-n":
            drop_count = _atoi(value)
        elif opt == "-i":
            ifn = value
        elif opt == "-o":
            ofn = value
        elif opt == "-p":
            drop_position = _atoi(value)
        elif opt in ("-R", "-A"):
            try:
                pid = parse_hex_pid(value, ALL_PIDS)
            except ValueError:
                _usage()
                raise SystemExit(1)
            if opt == "-R":
                pid_filter.remove(pid)
            else:
                pid_filter.add(pid)
        else:
            _usage()
            raise SystemExit(1)

    if not ifn:
        _usage()
        print("\n-i is mandatory", file=sys.stderr)
        raise SystemExit(1)
    if not ofn:
        print("\n-o is mandatory", file=sys.stderr)
        raise SystemExit(1)

    for dropped in pid_filter.dropped():
        print(f"Dropping content on PID 0x{dropped:04x}")

    try:
        src = open(ifn, "rb")
    except OSError:
        print(f"Unable to open input file '{ifn}'", file=sys.stderr)
        raise SystemExit(1)
    with src:
        try:
            dst = open(ofn, "wb")
        except OSError:
            print(f"Unable to open output file '{ofn}'", file=sys.stderr)
            raise SystemExit(1)
        with dst:
            print(
                f"Dropping {drop_count} packets on pid 0x{pid:04x} starting at packet "
                f"#{drop_position}, {'will' if do_fixups else 'WILL NOT'} correct CC in headers"
            )
            filter_stream(src, dst, pid_filter)
    return 0