"""
python-can adapter for the SLCAN codec.

Maps CanFrame to and from can.Message and exposes a CanSocket as a
can.BusABC, so the codec can be used anywhere python-can expects a bus:

    bus = SlcanBus('/dev/ttyACM0', bitrate=500000)
    bus.send(can.Message(arbitration_id=0x123, data=b'\\x01', is_extended_id=False))
    msg = bus.recv(timeout=1.0)
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

import can
import serial

from .channel import DEFAULT_TTY_BAUDRATE, CanSocket, open_serial
from .errors import FrameError, WouldBlock
from .protocol import BitRate, CanFrame, make_id

logger = logging.getLogger(__name__)

# Sleep between polls of an idle port
POLL_INTERVAL = 0.001


def frame_to_message(frame: CanFrame, channel=None) -> can.Message:
    return can.Message(
        timestamp=time.time(),
        arbitration_id=frame.id.raw,
        is_extended_id=frame.is_extended,
        dlc=frame.dlc,
        data=frame.payload,
        channel=channel,
    )


def message_to_frame(msg: can.Message) -> CanFrame:
    if msg.is_remote_frame:
        raise can.CanOperationError("remote frames are not supported by SLCAN codec")
    if msg.is_fd:
        raise can.CanOperationError("CAN FD frames are not supported by SLCAN codec")
    return CanFrame.new(make_id(msg.arbitration_id, msg.is_extended_id), bytes(msg.data))


class SlcanBus(can.BusABC):
    """python-can bus backed by a CanSocket on a serial port."""

    def __init__(
        self,
        channel: str,
        bitrate: int = 500000,
        tty_baudrate: int = DEFAULT_TTY_BAUDRATE,
        **kwargs,
    ):
        try:
            setup = BitRate.from_bps(bitrate)
        except ValueError as e:
            raise can.CanInitializationError(str(e)) from e

        try:
            self._port = open_serial(channel, baudrate=tty_baudrate)
        except serial.SerialException as e:
            raise can.CanInitializationError(f"failed to open {channel}: {e}") from e

        self._socket = CanSocket(self._port)
        self.channel_info = f"SLCAN on {channel}"
        self._channel = channel

        # Close first in case the adapter was left open by a previous session
        try:
            self._socket.close()
            self._socket.open(setup)
        except serial.SerialException as e:
            self._port.close()
            raise can.CanInitializationError(f"failed to open CAN channel: {e}") from e

        super().__init__(channel, **kwargs)

    def send(self, msg: can.Message, timeout: Optional[float] = None) -> None:
        try:
            frame = message_to_frame(msg)
        except FrameError as e:
            raise can.CanOperationError(f"cannot send message: {e}") from e
        try:
            self._socket.write(frame.id, frame.payload)
        except serial.SerialException as e:
            raise can.CanOperationError(f"write failed: {e}") from e

    def _recv_internal(self, timeout: Optional[float]) -> Tuple[Optional[can.Message], bool]:
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            try:
                frame = self._socket.read()
            except WouldBlock:
                if deadline is not None and time.monotonic() >= deadline:
                    return None, False
                time.sleep(POLL_INTERVAL)
                continue
            except FrameError as e:
                logger.debug("skipping line: %s", e)
                continue
            except serial.SerialException as e:
                raise can.CanOperationError(f"read failed: {e}") from e
            return frame_to_message(frame, channel=self._channel), False

    def fileno(self) -> int:
        try:
            return self._socket.fileno()
        except AttributeError:
            raise NotImplementedError(f"{self._channel} has no file descriptor") from None

    def shutdown(self) -> None:
        super().shutdown()
        if not self._port.is_open:
            return
        try:
            self._socket.close()
        finally:
            self._port.close()
