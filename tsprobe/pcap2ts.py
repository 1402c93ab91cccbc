"""Extract transport stream payloads from UDP/RTP captures."""

from __future__ import annotations

import getopt
import ipaddress
import re
import struct
import sys
from collections import Counter
from contextlib import ExitStack
from typing import BinaryIO, TextIO

from .pcapfile import PcapFormatError, PcapReader, PcapRecord
from .ts import PACKET_SIZE, SYNC_BYTE, hexdump

_ETHER_HEADER = 14
_LOOPBACK_HEADER = 4
_IP_HEADER = 20
_UDP_HEADER = 8
_RTP_HEADER = 12
_UDP_PROTOCOL = 0x11


class ExtractError(Exception):
    """Raised when a matching datagram carries neither TS nor RTP-wrapped TS."""

    def __init__(self, packet_number: int, dump: str) -> None:
        super().__init__(f"Error at packet {packet_number}")
        self.packet_number = packet_number
        self.dump = dump


class Extractor:
    """Select UDP datagrams for one destination and write their TS payload."""

    def __init__(
        self,
        address: str = "0.0.0.0",
        port: int = 0,
        output: BinaryIO | None = None,
        raw: bool = False,
        verbose: int = 0,
        log: TextIO | None = None,
    ) -> None:
        self._address = ipaddress.IPv4Address(address).packed
        self.port = port
        self.output = output
        self.raw = raw
        self.verbose = verbose
        self._log = log
        self.packets = 0
        self.matched = 0
        self.ts_packets_written = 0
        self.intervals: Counter[int] = Counter()
        self._last_us = 0

    def _emit(self, text: str) -> None:
        (self._log or sys.stdout).write(text)

    def process(self, record: PcapRecord) -> int:
        """Handle one captured frame; return the number of payload bytes extracted."""
        self.packets += 1
        now_us = record.ts_sec * 1_000_000 + record.ts_usec
        diffus = now_us - self._last_us
        self._last_us = now_us
        if self.packets == 1:
            diffus = 0
        else:
            self.intervals[int(diffus / 1000)] += 1

        if diffus > 100 * 1_000_000:
            self._emit("!Packet interval > 100ms\n")

        buf = record.data
        if self.verbose:
            self._emit(
                f"{record.ts_sec}.{record.ts_usec:06d} [{diffus:8d}(us)] ({record.length:4d}) - "
            )
        if self.verbose > 1:
            self._emit(hexdump(buf[:32], 32))

        loopback = len(buf) >= 4 and struct.unpack_from("<I", buf)[0] == 2
        ip_offset = _LOOPBACK_HEADER if loopback else _ETHER_HEADER
        hdrlen = ip_offset + _IP_HEADER + _UDP_HEADER
        if len(buf) < hdrlen:
            return 0
        if buf[ip_offset + 9] != _UDP_PROTOCOL:
            return 0

        length = max(record.length - hdrlen, 0)
        data = buf[hdrlen:hdrlen + length]
        src_raw = buf[ip_offset + 12:ip_offset + 16]
        dst_raw = buf[ip_offset + 16:ip_offset + 20]
        sport, dport = struct.unpack_from("!HH", buf, ip_offset + _IP_HEADER)

        if self.verbose:
            src = ipaddress.IPv4Address(src_raw)
            dst = ipaddress.IPv4Address(dst_raw)
            self._emit(f"{src}:{sport} -> {dst}:{dport}  = " + hexdump(buf[:31], 32))

        if dport != self.port or dst_raw != self._address:
            return 0

        self.matched += 1
        if self.raw:
            if self.output is not None:
                self.ts_packets_written += 1
                self.output.write(data)
            return len(data)

        offset = 0
        if data[:1] != bytes([SYNC_BYTE]):
            rtp_ts = len(data) > _RTP_HEADER and data[_RTP_HEADER] == SYNC_BYTE
            if data[:1] != b"\x80" and not rtp_ts:
                raise ExtractError(self.matched, hexdump(data, 16))
            offset = _RTP_HEADER

        chunk = data[offset:]
        if self.output is not None:
            self.ts_packets_written += len(data) // PACKET_SIZE
            self.output.write(chunk)
        return len(chunk)


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _usage(prog: str) -> None:
    print(f"Usage: {prog}")
    print("  -i <input.pcap>")
    print("  -o <output.ts>")
    print("  -a <ip address Eg. 234.1.1.1>")
    print("  -p <ip port Eg. 9200>")
    print("  -v increase verbosity level")
    print("  -r operate in raw mode, just extract the pcap payload without consdieration for TS packets.")
    print("     Useful for extracting RTP or A/324 streams and preserving headers.")


def main(argv: list[str] | None = None) -> int:
    prog = sys.argv[0] if sys.argv else "pcap2ts"
    args = sys.argv[1:] if argv is None else argv
    try:
        opts, _ = getopt.getopt(args, "?hi:o:a:p:vr")
    except getopt.GetoptError:
        _usage(prog)
        raise SystemExit(1)

    iname = oname = addr = None
    port = 0
    verbose = 0
    raw = False
    for opt, value in opts:
        if opt == "-a":
            addr = value
            try:
                ipaddress.IPv4Address(value)
            except ValueError:
                _usage(prog)
                print("\n *** -a is malformed ***", file=sys.stderr)
                raise SystemExit(1)
        elif opt == "-i":
            iname = value
        elif opt == "-o":
            oname = value
        elif opt == "-p":
            port = _atoi(value)
        elif opt == "-v":
            verbose += 1
        elif opt == "-r":
            raw = True
        else:
            _usage(prog)
            raise SystemExit(1)

    if not iname:
        _usage(prog)
        print("\n *** -i is mandatory ***", file=sys.stderr)
        raise SystemExit(1)
    if addr and not port:
        _usage(prog)
        print("\n *** -p is mandatory ***", file=sys.stderr)
        raise SystemExit(1)
    if not addr and port:
        _usage(prog)
        print("\n *** -a is mandatory ***", file=sys.stderr)
        raise SystemExit(1)

    with ExitStack() as stack:
        output = None
        if oname:
            try:
                output = stack.enter_context(open(oname, "wb"))
            except OSError:
                print(f"Cannot open output file {oname}", file=sys.stderr)
                raise SystemExit(1)

        try:
            stream = stack.enter_context(open(iname, "rb"))
            reader = PcapReader(stream)
        except (OSError, PcapFormatError) as exc:
            print(f"Cannot open pcap file: {exc}", file=sys.stderr)
            raise SystemExit(1)

        if port:
            print(f"Extracting TS from udp/ip destination {addr}:{port} to {oname}")

        extractor = Extractor(
            address=addr or "0.0.0.0", port=port, output=output, raw=raw, verbose=verbose
        )
        try:
            for record in reader:
                extractor.process(record)
        except PcapFormatError as exc:
            print(f"Cannot read from pcap file: {exc}", file=sys.stderr)
        except ExtractError as exc:
            print(str(exc), file=sys.stderr)
            print(exc.dump, end="")
            raise SystemExit(1)

    if oname:
        print(f"Wrote {extractor.ts_packets_written} packets.")
    print()
    print()
    return 0