"""
Byte-at-a-time line reassembly for the inbound SLCAN stream.

Bytes accumulate in a fixed-size buffer until a CR or BEL arrives. A line
that overflows the buffer switches the reassembler to DISCARDING, and every
byte up to the next delimiter is dropped. Any delimiter, valid line or not,
puts it back into ACCUMULATING with an empty buffer, so corruption never
outlives one line.
"""

import enum
import logging
from typing import Optional

from .protocol import BELL, CARRIAGE_RETURN, SLCAN_MTU

logger = logging.getLogger(__name__)

# cmd + 3 digit id + dlc is the shortest data line
MIN_LINE_LEN = 5


class ReassemblyState(enum.Enum):
    ACCUMULATING = 'accumulating'
    DISCARDING = 'discarding'


class LineReassembler:
    def __init__(self, capacity: int = SLCAN_MTU):
        self.capacity = capacity
        self.buffer = bytearray(capacity)
        self.filled = 0
        self.state = ReassemblyState.ACCUMULATING

    @property
    def desynced(self) -> bool:
        return self.state is ReassemblyState.DISCARDING

    def reset(self) -> None:
        self.filled = 0
        self.state = ReassemblyState.ACCUMULATING

    def feed(self, byte: int) -> Optional[bytes]:
        """
        Push one byte. Returns the completed line (without delimiter) when a
        valid line has just been terminated, otherwise None.
        """
        if byte == CARRIAGE_RETURN or byte == BELL:
            return self._end_of_line(byte)

        if self.state is ReassemblyState.DISCARDING:
            return None

        if self.filled == self.capacity:
            logger.debug("line exceeds %d bytes, discarding until next delimiter", self.capacity)
            self.state = ReassemblyState.DISCARDING
            return None

        self.buffer[self.filled] = byte
        self.filled += 1
        return None

    def _end_of_line(self, delimiter: int) -> Optional[bytes]:
        valid = (
            delimiter == CARRIAGE_RETURN
            and self.state is ReassemblyState.ACCUMULATING
            and self.filled >= MIN_LINE_LEN
        )
        line = bytes(self.buffer[:self.filled]) if valid else None

        if not valid and self.filled:
            logger.debug("dropping %d byte line (%s, delimiter 0x%02X)",
                         self.filled, self.state.value, delimiter)
        self.reset()
        return line
