"""
ASCII hex helpers for the SLCAN wire format.

Decoding is strict: only 0-9, a-f and A-F are accepted, and a field either
decodes completely or raises MalformedHex. Encoding is always uppercase and
zero-padded to a fixed width, since the decoder relies on fixed column
offsets.
"""

from .errors import MalformedHex

HEX_DIGITS = b'0123456789ABCDEF'


def hex_digit_value(byte: int) -> int:
    """Return the nibble value of one ASCII hex digit."""
    if 0x30 <= byte <= 0x39:  # '0'-'9'
        return byte - 0x30
    if 0x61 <= byte <= 0x66:  # 'a'-'f'
        return byte - 0x61 + 10
    if 0x41 <= byte <= 0x46:  # 'A'-'F'
        return byte - 0x41 + 10
    raise MalformedHex(f"not a hex digit: {bytes([byte])!r}")


def hex_pair_to_byte(pair: bytes) -> int:
    """Decode two ASCII hex digits (high nibble first) into a byte value."""
    if len(pair) != 2:
        raise MalformedHex(f"expected 2 hex digits, got {len(pair)}")
    return (hex_digit_value(pair[0]) << 4) | hex_digit_value(pair[1])


def hex_to_int(digits: bytes) -> int:
    """Accumulate a run of hex digits into an unsigned integer."""
    value = 0
    for byte in digits:
        value = (value << 4) | hex_digit_value(byte)
    return value


def _fixed(digits: bytes, width: int) -> int:
    if len(digits) != width:
        raise MalformedHex(f"expected {width} hex digits, got {len(digits)}")
    return hex_to_int(digits)


def hex3_to_u16(digits: bytes) -> int:
    return _fixed(digits, 3)


def hex8_to_u32(digits: bytes) -> int:
    return _fixed(digits, 8)


def hex_digit(value: int) -> int:
    """ASCII byte for the low nibble of value."""
    return HEX_DIGITS[value & 0xF]


def u16_to_hex3(value: int) -> bytes:
    return f'{value & 0xFFF:03X}'.encode('ascii')


def u32_to_hex8(value: int) -> bytes:
    return f'{value & 0xFFFFFFFF:08X}'.encode('ascii')


def bytes_to_hex(data) -> bytes:
    """Two uppercase hex digits per byte, no separators."""
    return ''.join(f'{byte:02X}' for byte in data).encode('ascii')
