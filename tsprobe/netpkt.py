"""Decoding of Ethernet/IPv4/UDP frames that carry transport streams."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass

from .ts import PACKET_SIZE

ETHER_HEADER = 14
IP_HEADER = 20
UDP_HEADER = 8
RTP_HEADER = 12
ETHERTYPE_IP = 0x0800
IPPROTO_UDP = 17

_MIN_FRAME = ETHER_HEADER + IP_HEADER + UDP_HEADER


@dataclass(frozen=True)
class UdpDatagram:
    """The addressing of one UDP datagram and the payload it carries."""

    src: str
    sport: int
    dst: str
    dport: int
    length: int
    payload: bytes

    def __str__(self) -> str:
        head = " ".join(f"{b:02x}" for b in self.payload[:4])
        return f"{self.src}:{self.sport} -> {self.dst}:{self.dport} : {self.length:4d} : {head}"


def decode_udp(frame: bytes) -> UdpDatagram | None:
    """Decode an Ethernet frame; return None unless it is a complete IPv4 UDP frame."""
    if len(frame) < _MIN_FRAME:
        return None
    (ether_type,) = struct.unpack_from("!H", frame, 12)
    if ether_type != ETHERTYPE_IP:
        return None
    ip = ETHER_HEADER
    if frame[ip + 9] != IPPROTO_UDP:
        return None
    src = str(ipaddress.IPv4Address(frame[ip + 12:ip + 16]))
    dst = str(ipaddress.IPv4Address(frame[ip + 16:ip + 20]))
    sport, dport, length = struct.unpack_from("!HHH", frame, ip + IP_HEADER)
    payload_len = max(length - UDP_HEADER, 0)
    payload = bytes(frame[_MIN_FRAME:_MIN_FRAME + payload_len])
    return UdpDatagram(src, sport, dst, dport, length, payload)


def strip_rtp(payload: bytes) -> bytes:
    """Drop a 12-byte RTP header when what follows is a whole number of TS packets."""
    if len(payload) > RTP_HEADER and (len(payload) - RTP_HEADER) % PACKET_SIZE == 0:
        return payload[RTP_HEADER:]
    return payload