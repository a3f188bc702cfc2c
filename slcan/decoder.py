"""Parse one complete, delimiter-stripped SLCAN line into a CanFrame."""

from .errors import InvalidLength, UnsupportedCommand
from .hexcodec import hex3_to_u16, hex8_to_u32, hex_digit_value, hex_pair_to_byte
from .protocol import CMD_LEN, MAX_DLC, CanFrame, Command, ExtendedId, StandardId


def decode_line(line: bytes) -> CanFrame:
    """
    Decode a data frame line (without the trailing CR).

    Raises UnsupportedCommand for anything that is not a t/T line, and
    MalformedHex, InvalidLength or IdentifierOutOfRange for a corrupt one.
    Anything after the data digits (e.g. a timestamp) is ignored.
    """
    if not line:
        raise UnsupportedCommand("empty line")

    command = Command.from_byte(line[0])
    if command is Command.TRANSMIT_STANDARD:
        id_type, parse_id = StandardId, hex3_to_u16
    elif command is Command.TRANSMIT_EXTENDED:
        id_type, parse_id = ExtendedId, hex8_to_u32
    else:
        raise UnsupportedCommand(f"{command.name} is not a data frame")

    dlc_pos = CMD_LEN + id_type.HEX_WIDTH
    if len(line) <= dlc_pos:
        raise InvalidLength(f"line too short for {command.name}: {len(line)} bytes")

    id = id_type(parse_id(line[CMD_LEN:dlc_pos]))

    dlc = hex_digit_value(line[dlc_pos])
    if dlc > MAX_DLC:
        raise InvalidLength(f"dlc {dlc} out of range 0..{MAX_DLC}")

    data_pos = dlc_pos + 1
    digits = line[data_pos:data_pos + 2 * dlc]
    if len(digits) < 2 * dlc:
        raise InvalidLength(f"dlc {dlc} needs {2 * dlc} data digits, got {len(digits)}")

    data = bytes(hex_pair_to_byte(digits[i:i + 2]) for i in range(0, len(digits), 2))
    return CanFrame(id, dlc, data)
