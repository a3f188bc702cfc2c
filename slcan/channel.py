"""
SLCAN channel controller.

CanSocket drives an SLCAN adapter over any pyserial-like port (an object with
read(size) and write(data)). It issues setup/open/close commands, encodes
outgoing frames and reassembles incoming lines into CanFrame objects.

One CanSocket owns its port; it is not safe to share either between threads
without external locking.
"""

import logging

import serial

from .decoder import decode_line
from .encoder import encode_close, encode_frame, encode_open, encode_setup
from .errors import WouldBlock
from .protocol import BitRate, CanFrame, Id
from .reassembler import LineReassembler

logger = logging.getLogger(__name__)

DEFAULT_TTY_BAUDRATE = 115200


def open_serial(port: str, baudrate: int = DEFAULT_TTY_BAUDRATE, timeout=0):
    """
    Open a serial port (or pyserial URL such as loop://) for a CanSocket.

    The default timeout of 0 makes reads non-blocking, so read() reports
    WouldBlock instead of stalling when the adapter is quiet.
    """
    ser = serial.serial_for_url(port, baudrate=baudrate, timeout=timeout)
    logger.debug("opened %s at %d baud", port, baudrate)
    return ser


class CanSocket:
    def __init__(self, port):
        self.port = port
        self._rx = LineReassembler()

    def fileno(self) -> int:
        return self.port.fileno()

    def open(self, bitrate: BitRate) -> None:
        """Send the setup and open commands. The adapter's replies are not awaited."""
        self._write_all(encode_setup(bitrate))
        self._write_all(encode_open())
        logger.info("channel opened at %d bit/s", bitrate.bps)

    def close(self) -> None:
        self._write_all(encode_close())
        logger.info("channel closed")

    def write(self, id: Id, data=b'') -> int:
        """Transmit one data frame. Returns the number of bytes the port accepted."""
        return self.port.write(encode_frame(id, data))

    def read(self) -> CanFrame:
        """
        Return the next received frame.

        Raises WouldBlock when the port has no more bytes, or a FrameError if
        the line that just completed is corrupt or not a data frame. Either way
        the next call resumes cleanly.
        """
        while True:
            chunk = self.port.read(1)
            if not chunk:
                raise WouldBlock("no data available")
            line = self._rx.feed(chunk[0])
            if line is not None:
                return decode_line(line)

    def reset(self) -> None:
        """Forget any partially received line."""
        self._rx.reset()

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = self.port.write(view)
            if written is None:
                written = len(view)
            elif written == 0:
                raise serial.SerialTimeoutException("port accepted no data")
            view = view[written:]
