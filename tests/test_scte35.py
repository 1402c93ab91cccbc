import math

import pytest

from tsprobe.scte35 import format_section_dump, trigger_banner


def test_two_byte_section_dump():
    assert format_section_dump(b"\xfc\x30") == "\n  -> fc 30 \n\n"


@pytest.mark.parametrize("length", [1, 15, 16, 17, 32, 33, 100])
def test_row_count_matches_length(length):
    text = format_section_dump(bytes(range(length)))
    assert text.count("  -> ") == math.ceil(length / 16)


@pytest.mark.parametrize("length", [16, 32, 48])
def test_full_rows_have_no_extra_blank_line(length):
    text = format_section_dump(bytes(length))
    assert text.endswith(" \n")
    assert not text.endswith("\n\n")


@pytest.mark.parametrize("length", [1, 17, 40])
def test_partial_row_adds_blank_line(length):
    text = format_section_dump(bytes(length))
    assert text.endswith(" \n\n")


def test_dump_tokens_round_trip():
    data = bytes(range(200, 250))
    text = format_section_dump(data)
    tokens = [tok for tok in text.replace("->", " ").split()]
    assert bytes(int(tok, 16) for tok in tokens) == data


def test_each_row_holds_at_most_sixteen_bytes():
    text = format_section_dump(bytes(range(50)))
    rows = [line for line in text.splitlines() if line.startswith("  -> ")]
    assert [len(row[5:].split()) for row in rows] == [16, 16, 16, 2]


def test_empty_section():
    assert format_section_dump(b"") == "\n"


def test_trigger_banner_carries_number():
    banner = trigger_banner(7)
    assert banner.startswith("<-- Trigger 7 ")
    assert banner.endswith("--->")


def test_trigger_banner_differs_by_number():
    assert trigger_banner(1).replace("1", "", 1) == trigger_banner(2).replace("2", "", 1)
    assert trigger_banner(1) != trigger_banner(2)