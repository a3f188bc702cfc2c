"""
SLCAN/LAWICEL protocol data model: commands, bit rates, identifiers and frames.

Wire format (every line terminated by CR):

    S<d>            set bit rate, d in 0-8
    O               open channel
    C               close channel
    tiiil<dd..>     standard frame, 3 hex ID digits, DLC, 2*DLC data digits
    Tiiiiiiiil<dd>  extended frame, 8 hex ID digits, DLC, 2*DLC data digits
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .errors import IdentifierOutOfRange, InvalidLength, UnsupportedCommand

CARRIAGE_RETURN = 0x0D
BELL = 0x07  # adapter error, aborts the line in progress

# Longest line we may receive: extended frame, 8 data bytes and a
# 4 digit timestamp, plus the CR and one spare byte.
SLCAN_MTU = len(b'T1111222281122334455667788EA5F\r') + 1

CMD_LEN = 1
MAX_DLC = 8


class Command(enum.Enum):
    SETUP = b'S'
    OPEN = b'O'
    CLOSE = b'C'
    TRANSMIT_STANDARD = b't'
    TRANSMIT_EXTENDED = b'T'

    @classmethod
    def from_byte(cls, value: int) -> 'Command':
        """Map a raw leading byte onto a command."""
        try:
            return cls(bytes([value]))
        except ValueError:
            raise UnsupportedCommand(f"unknown command byte {bytes([value])!r}") from None


class BitRate(enum.Enum):
    """Standard CAN bit rates, as sent in the S<d> setup command."""

    SETUP_10KBIT = b'0'
    SETUP_20KBIT = b'1'
    SETUP_50KBIT = b'2'
    SETUP_100KBIT = b'3'
    SETUP_125KBIT = b'4'
    SETUP_250KBIT = b'5'
    SETUP_500KBIT = b'6'
    SETUP_800KBIT = b'7'
    SETUP_1MBIT = b'8'

    @property
    def bps(self) -> int:
        return _BITRATE_BPS[self]

    @classmethod
    def from_bps(cls, bps: int) -> 'BitRate':
        for member, rate in _BITRATE_BPS.items():
            if rate == bps:
                return member
        raise ValueError(f"unsupported CAN bit rate: {bps}")


_BITRATE_BPS = {
    BitRate.SETUP_10KBIT: 10000,
    BitRate.SETUP_20KBIT: 20000,
    BitRate.SETUP_50KBIT: 50000,
    BitRate.SETUP_100KBIT: 100000,
    BitRate.SETUP_125KBIT: 125000,
    BitRate.SETUP_250KBIT: 250000,
    BitRate.SETUP_500KBIT: 500000,
    BitRate.SETUP_800KBIT: 800000,
    BitRate.SETUP_1MBIT: 1000000,
}


@dataclass(frozen=True)
class StandardId:
    """11-bit CAN identifier."""

    raw: int

    MAX_RAW = 0x7FF
    HEX_WIDTH = 3
    COMMAND = Command.TRANSMIT_STANDARD
    is_extended = False

    def __post_init__(self):
        if not 0 <= self.raw <= self.MAX_RAW:
            raise IdentifierOutOfRange(f"standard id 0x{self.raw:X} exceeds 0x{self.MAX_RAW:X}")

    def __str__(self):
        return f"0x{self.raw:03X}"


@dataclass(frozen=True)
class ExtendedId:
    """29-bit CAN identifier."""

    raw: int

    MAX_RAW = 0x1FFFFFFF
    HEX_WIDTH = 8
    COMMAND = Command.TRANSMIT_EXTENDED
    is_extended = True

    def __post_init__(self):
        if not 0 <= self.raw <= self.MAX_RAW:
            raise IdentifierOutOfRange(f"extended id 0x{self.raw:X} exceeds 0x{self.MAX_RAW:X}")

    def __str__(self):
        return f"0x{self.raw:08X}"


Id = Union[StandardId, ExtendedId]


def make_id(raw: int, extended: Optional[bool] = None) -> Id:
    """Build an identifier; without a hint, anything above 0x7FF is extended."""
    if extended is None:
        extended = raw > StandardId.MAX_RAW
    return ExtendedId(raw) if extended else StandardId(raw)


@dataclass(frozen=True)
class CanFrame:
    """
    A classic CAN data frame.

    ``data`` always holds 8 bytes; only the first ``dlc`` are meaningful and
    the rest are zero.
    """

    id: Id
    dlc: int
    data: bytes = bytes(MAX_DLC)

    def __post_init__(self):
        if not 0 <= self.dlc <= MAX_DLC:
            raise InvalidLength(f"dlc {self.dlc} out of range 0..{MAX_DLC}")
        data = bytes(self.data)
        if len(data) > MAX_DLC or len(data) < self.dlc:
            raise InvalidLength(f"{len(data)} data bytes for dlc {self.dlc}")
        object.__setattr__(self, 'data', data[:self.dlc].ljust(MAX_DLC, b'\x00'))

    @classmethod
    def new(cls, id: Id, data=b'') -> 'CanFrame':
        data = bytes(data)
        return cls(id, len(data), data)

    @property
    def payload(self) -> bytes:
        return self.data[:self.dlc]

    @property
    def is_extended(self) -> bool:
        return self.id.is_extended

    def __str__(self):
        data_str = ' '.join(f'{b:02X}' for b in self.payload)
        return f"CanFrame(id={self.id}, dlc={self.dlc}, data=[{data_str}])"
