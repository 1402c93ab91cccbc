import pytest

from tsprobe.ts import hexdump, iter_packets, packet_pid, packets_on_pid, parse_hex_pid


def make_packet(pid, fill=0):
    return bytes([0x47, (pid >> 8) & 0x1F, pid & 0xFF, 0x10]) + bytes([fill]) * 184


@pytest.mark.parametrize("pid", [0x0, 0x31, 0x100, 0x1FFF])
def test_packet_pid_round_trip(pid):
    assert packet_pid(make_packet(pid)) == pid


def test_packet_pid_ignores_flag_bits():
    packet = bytearray(make_packet(0x123))
    packet[1] |= 0xE0
    assert packet_pid(bytes(packet)) == 0x123


def test_packet_pid_short():
    with pytest.raises(ValueError):
        packet_pid(b"\x47\x00")


def test_iter_packets_drops_partial_tail():
    data = make_packet(1, 1) + make_packet(2, 2) + bytes(100)
    packets = list(iter_packets(data))
    assert [packet_pid(p) for p in packets] == [1, 2]
    assert all(len(p) == 188 for p in packets)


def test_packets_on_pid_filters():
    data = make_packet(0x30, 1) + make_packet(0x31, 2) + make_packet(0x30, 3)
    found = list(packets_on_pid(data, 0x30))
    assert found == [make_packet(0x30, 1), make_packet(0x30, 3)]


def test_parse_hex_pid_accepts_limit():
    assert parse_hex_pid("0x1fff", 0x1FFF) == 0x1FFF
    assert parse_hex_pid("0x31") == 0x31


@pytest.mark.parametrize("text", ["31", "0X31", "x31", "", "0xzz"])
def test_parse_hex_pid_rejects_bad_form(text):
    with pytest.raises(ValueError):
        parse_hex_pid(text)


def test_parse_hex_pid_rejects_over_limit():
    with pytest.raises(ValueError):
        parse_hex_pid("0x2000", 0x1FFF)
    assert parse_hex_pid("0x2000", 0x2000) == 0x2000


def test_hexdump_rows():
    assert hexdump(bytes(range(4)), 2) == "00 01\n02 03\n\n"


def test_hexdump_partial_row():
    assert hexdump(b"\xab", 16) == "ab \n"


def test_hexdump_bad_row_width():
    with pytest.raises(ValueError):
        hexdump(b"\x00", 0)