import struct

import pytest

from tsprobe.netpkt import UdpDatagram, decode_udp, strip_rtp


def make_frame(payload, ethertype=0x0800, proto=17,
               src=(10, 0, 0, 1), dst=(239, 1, 1, 1), sport=5000, dport=4001):
    eth = b"\x00" * 12 + struct.pack("!H", ethertype)
    ip = bytearray(20)
    ip[0] = 0x45
    ip[9] = proto
    ip[12:16] = bytes(src)
    ip[16:20] = bytes(dst)
    udp = struct.pack("!HHHH", sport, dport, len(payload) + 8, 0)
    return eth + bytes(ip) + udp + payload


def ts_packets(count):
    return (b"\x47" + b"\x00" * 187) * count


def test_decode_fields_round_trip():
    payload = ts_packets(7)
    dgram = decode_udp(make_frame(payload))
    assert isinstance(dgram, UdpDatagram)
    assert dgram.src == "10.0.0.1"
    assert dgram.dst == "239.1.1.1"
    assert dgram.sport == 5000
    assert dgram.dport == 4001
    assert dgram.length == len(payload) + 8
    assert dgram.payload == payload


def test_non_ip_frame_ignored():
    assert decode_udp(make_frame(ts_packets(1), ethertype=0x86DD)) is None


def test_non_udp_frame_ignored():
    assert decode_udp(make_frame(ts_packets(1), proto=6)) is None


def test_short_frame_ignored():
    assert decode_udp(make_frame(b"")[:41]) is None


def test_str_contains_addresses():
    dgram = decode_udp(make_frame(b"\x47\x01\x02\x03" + b"\x00" * 184))
    text = str(dgram)
    assert text.startswith("10.0.0.1:5000 -> 239.1.1.1:4001 : ")
    assert text.endswith("47 01 02 03")


def test_strip_rtp_removes_header():
    body = ts_packets(7)
    assert strip_rtp(b"\x80" * 12 + body) == body


def test_strip_rtp_leaves_plain_ts():
    body = ts_packets(7)
    assert strip_rtp(body) == body


@pytest.mark.parametrize("size", [0, 12, 100, 12 + 187])
def test_strip_rtp_leaves_other_sizes(size):
    data = bytes(size)
    assert strip_rtp(data) == data