"""Reading and writing classic libpcap capture files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator

MAGIC_USEC = 0xA1B2C3D4
MAGIC_NSEC = 0xA1B23C4D
VERSION_MAJOR = 2
VERSION_MINOR = 4
LINKTYPE_ETHERNET = 1
DEFAULT_SNAPLEN = 0x400000

_FILE_HEADER = "IHHiIII"
_RECORD_HEADER = "IIII"


class PcapFormatError(ValueError):
    """Raised when a capture file is malformed or truncated."""


@dataclass
class PcapRecord:
    """One captured frame: timestamp, captured bytes and original wire length."""

    ts_sec: int
    ts_usec: int
    data: bytes
    orig_len: int | None = None

    def __post_init__(self) -> None:
        if self.orig_len is None:
            self.orig_len = len(self.data)

    @property
    def length(self) -> int:
        return self.orig_len


class PcapReader:
    """Iterate over the records of a pcap stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        header = stream.read(struct.calcsize("<" + _FILE_HEADER))
        if len(header) < 24:
            raise PcapFormatError("truncated pcap file header")
        for order in "<>":
            (magic,) = struct.unpack_from(order + "I", header)
            if magic in (MAGIC_USEC, MAGIC_NSEC):
                break
        else:
            raise PcapFormatError(f"unknown pcap magic 0x{magic:08x}")
        self._order = order
        self.nanosecond = magic == MAGIC_NSEC
        (
            _,
            self.version_major,
            self.version_minor,
            self.thiszone,
            self.sigfigs,
            self.snaplen,
            self.linktype,
        ) = struct.unpack(order + _FILE_HEADER, header)

    def __iter__(self) -> Iterator[PcapRecord]:
        header_size = struct.calcsize("<" + _RECORD_HEADER)
        while True:
            head = self._stream.read(header_size)
            if not head:
                return
            if len(head) < header_size:
                raise PcapFormatError("truncated record header")
            sec, frac, incl_len, orig_len = struct.unpack(self._order + _RECORD_HEADER, head)
            data = self._stream.read(incl_len)
            if len(data) < incl_len:
                raise PcapFormatError("truncated record data")
            usec = frac // 1000 if self.nanosecond else frac
            yield PcapRecord(sec, usec, data, orig_len)


def pcap_file_header() -> bytes:
    """The 24-byte file header used for Ethernet recordings."""
    return struct.pack(
        "<" + _FILE_HEADER,
        MAGIC_USEC,
        VERSION_MAJOR,
        VERSION_MINOR,
        0,
        0,
        DEFAULT_SNAPLEN,
        LINKTYPE_ETHERNET,
    )


def record_bytes(record: PcapRecord) -> bytes:
    """Serialise a record: 16-byte header followed by the captured data."""
    head = struct.pack(
        "<" + _RECORD_HEADER,
        record.ts_sec,
        record.ts_usec,
        len(record.data),
        record.orig_len,
    )
    return head + record.data


def read_pcap(path) -> Iterator[PcapRecord]:
    """Yield every record of the capture file at ``path``."""
    with open(path, "rb") as stream:
        yield from PcapReader(stream)