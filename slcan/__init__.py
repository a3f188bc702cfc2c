"""SLCAN (LAWICEL) ASCII protocol codec for serial USB-CAN adapters."""

from .channel import CanSocket, open_serial
from .decoder import decode_line
from .encoder import encode_close, encode_frame, encode_open, encode_setup
from .errors import (
    FrameError,
    IdentifierOutOfRange,
    InvalidLength,
    MalformedHex,
    SlcanError,
    UnsupportedCommand,
    WouldBlock,
)
from .protocol import BitRate, CanFrame, Command, ExtendedId, Id, StandardId, make_id
from .reassembler import LineReassembler, ReassemblyState

__version__ = "0.1.0"

__all__ = [
    "BitRate",
    "CanFrame",
    "CanSocket",
    "Command",
    "ExtendedId",
    "FrameError",
    "Id",
    "IdentifierOutOfRange",
    "InvalidLength",
    "LineReassembler",
    "MalformedHex",
    "ReassemblyState",
    "SlcanError",
    "StandardId",
    "UnsupportedCommand",
    "WouldBlock",
    "decode_line",
    "encode_close",
    "encode_frame",
    "encode_open",
    "encode_setup",
    "make_id",
    "open_serial",
]
