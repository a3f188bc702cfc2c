"""Tests for the ASCII hex helpers."""

import pytest

from slcan.errors import MalformedHex
from slcan.hexcodec import (
    bytes_to_hex,
    hex3_to_u16,
    hex8_to_u32,
    hex_digit,
    hex_digit_value,
    hex_pair_to_byte,
    u16_to_hex3,
    u32_to_hex8,
)


def test_digit_values_accept_both_cases() -> None:
    assert [hex_digit_value(b) for b in b'09afAF'] == [0, 9, 10, 15, 10, 15]


@pytest.mark.parametrize("byte", b'gG/:@`x \r')
def test_digit_value_rejects_non_hex(byte: int) -> None:
    with pytest.raises(MalformedHex):
        hex_digit_value(byte)


def test_pair_to_byte() -> None:
    assert hex_pair_to_byte(b'0B') == 0x0B
    assert hex_pair_to_byte(b'fe') == 0xFE
    with pytest.raises(MalformedHex):
        hex_pair_to_byte(b'0Z')
    with pytest.raises(MalformedHex):
        hex_pair_to_byte(b'A')


def test_fixed_width_decode() -> None:
    assert hex3_to_u16(b'123') == 0x123
    assert hex3_to_u16(b'7ff') == 0x7FF
    assert hex8_to_u32(b'1ABCDEF1') == 0x1ABCDEF1
    assert hex8_to_u32(b'00000000') == 0


def test_fixed_width_decode_is_all_or_nothing() -> None:
    with pytest.raises(MalformedHex):
        hex3_to_u16(b'12G')
    with pytest.raises(MalformedHex):
        hex8_to_u32(b'1ABCDEF')
    with pytest.raises(MalformedHex):
        hex8_to_u32(b'+ABCDEF1')


def test_encode_is_uppercase_and_zero_padded() -> None:
    assert hex_digit(0xA) == ord('A')
    assert u16_to_hex3(0xBC) == b'0BC'
    assert u16_to_hex3(0) == b'000'
    assert u32_to_hex8(0x1ABCDEF1) == b'1ABCDEF1'
    assert u32_to_hex8(0x5) == b'00000005'
    assert bytes_to_hex(b'\x0b\x0e\x0e\x0f') == b'0B0E0E0F'
    assert bytes_to_hex(b'') == b''
