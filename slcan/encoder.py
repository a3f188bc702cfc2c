"""Serialize commands and CAN frames into SLCAN lines."""

from .errors import InvalidLength
from .hexcodec import bytes_to_hex, hex_digit, u16_to_hex3, u32_to_hex8
from .protocol import CARRIAGE_RETURN, MAX_DLC, BitRate, Command, Id

_CR = bytes([CARRIAGE_RETURN])


def encode_setup(bitrate: BitRate) -> bytes:
    return Command.SETUP.value + bitrate.value + _CR


def encode_open() -> bytes:
    return Command.OPEN.value + _CR


def encode_close() -> bytes:
    return Command.CLOSE.value + _CR


def encode_frame(id: Id, data=b'') -> bytes:
    """
    Build a transmit line for one data frame.

    Standard frame: tiiildd...\r
    Extended frame: Tiiiiiiiildd...\r
    """
    data = bytes(data)
    dlc = len(data)
    if dlc > MAX_DLC:
        raise InvalidLength(f"data length {dlc} exceeds {MAX_DLC}")

    line = bytearray(id.COMMAND.value)
    if id.is_extended:
        line += u32_to_hex8(id.raw)
    else:
        line += u16_to_hex3(id.raw)
    line.append(hex_digit(dlc))
    line += bytes_to_hex(data)
    line += _CR
    return bytes(line)
