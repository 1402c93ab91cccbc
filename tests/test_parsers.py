import pytest

from tsprobe.parsers import IpPid, ParseError, parse_ippid


def test_hex_pid_form():
    result = parse_ippid("227.1.20.80:4001.0x31")
    assert result.address == "227.1.20.80"
    assert result.port == 4001
    assert result.pid == 0x31
    assert result.digits == (227, 1, 20, 80)
    assert result.ui_address_ip == "227.1.20.80:4001"
    assert result.ui_address_ip_pid == "227.1.20.80:4001.0x31"


def test_decimal_pid_form():
    result = parse_ippid("227.1.20.80:4001.49")
    assert result.pid == 49
    assert result.ui_address_ip_pid == "227.1.20.80:4001.49"
    assert result.ui_address_ip == "227.1.20.80:4001"


def test_udp_url_form():
    result = parse_ippid("udp://227.1.20.80:4001")
    assert isinstance(result, IpPid)
    assert result.address == "227.1.20.80"
    assert result.port == 4001
    assert result.pid == 0
    assert result.ui_address_ip == "227.1.20.80:4001"
    assert result.ui_address_ip_pid == "227.1.20.80:4001.0x0"


def test_max_pid_accepted():
    assert parse_ippid("10.0.0.1:1234.0x1fff").pid == 0x1FFF


@pytest.mark.parametrize(
    "text",
    [
        "256.1.1.1:4001.0x31",
        "1.1.1.1:0.0x31",
        "1.1.1.1:70000.0x31",
        "1.1.1.1:4001.0x0",
        "1.1.1.1:4001.0x2000",
        "1.1.1.1:4001.0",
        "1.1.1.1:4001",
        "not an address",
        "",
    ],
)
def test_rejects(text):
    with pytest.raises(ParseError):
        parse_ippid(text)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_ippid("-1.2.3.4:5.6")