"""Tests for CanSocket against an in-memory serial port."""

import pytest
import serial

from slcan import (
    BitRate,
    CanFrame,
    CanSocket,
    ExtendedId,
    FrameError,
    InvalidLength,
    StandardId,
    UnsupportedCommand,
    WouldBlock,
    open_serial,
)
from slcan.protocol import SLCAN_MTU

from conftest import MockSerial


def test_open(socket, mock_serial) -> None:
    socket.open(BitRate.SETUP_500KBIT)
    assert mock_serial.take_tx() == "S6\rO\r"


@pytest.mark.parametrize("digit, bitrate", list(enumerate(BitRate)))
def test_open_every_bitrate(socket, mock_serial, digit, bitrate) -> None:
    socket.open(bitrate)
    assert mock_serial.take_tx() == f"S{digit}\rO\r"


def test_close(socket, mock_serial) -> None:
    socket.close()
    assert mock_serial.take_tx() == "C\r"


def test_partial_writes_are_completed() -> None:
    port = MockSerial(max_write=1)
    CanSocket(port).open(BitRate.SETUP_1MBIT)
    assert port.take_tx() == "S8\rO\r"


def test_write_std(socket, mock_serial) -> None:
    assert socket.write(StandardId(0x123), [0xB, 0xE, 0xE, 0xF]) == 14
    assert mock_serial.take_tx() == "t12340B0E0E0F\r"

    socket.write(StandardId(0xBC), [])
    assert mock_serial.take_tx() == "t0BC0\r"


def test_write_ext(socket, mock_serial) -> None:
    socket.write(ExtendedId(0x1ABCDEF1), [0xB, 0xE, 0xE, 0xF])
    assert mock_serial.take_tx() == "T1ABCDEF140B0E0E0F\r"

    socket.write(ExtendedId(0x1ABCDEF1), [])
    assert mock_serial.take_tx() == "T1ABCDEF10\r"


def test_write_too_long(socket, mock_serial) -> None:
    with pytest.raises(InvalidLength):
        socket.write(StandardId(1), bytes(9))
    assert mock_serial.take_tx() == ""


def test_read_std(socket, mock_serial) -> None:
    mock_serial.feed("t12340B0E0E0F\r")
    assert socket.read() == CanFrame(StandardId(0x123), 4, [0xB, 0xE, 0xE, 0xF])

    with pytest.raises(WouldBlock):
        socket.read()

    mock_serial.feed("t0BC0\r")
    assert socket.read() == CanFrame.new(StandardId(0xBC))


def test_read_ext(socket, mock_serial) -> None:
    mock_serial.feed("T1ABCDEF140B0E0E0F\r")
    assert socket.read() == CanFrame(ExtendedId(0x1ABCDEF1), 4, [0xB, 0xE, 0xE, 0xF])

    with pytest.raises(WouldBlock):
        socket.read()

    mock_serial.feed("T1ABCDEF10\r")
    frame = socket.read()
    assert frame.id == ExtendedId(0x1ABCDEF1)
    assert frame.dlc == 0


def test_would_block_is_blocking_io_error(socket) -> None:
    with pytest.raises(BlockingIOError):
        socket.read()


def test_read_resumes_partial_line(socket, mock_serial) -> None:
    mock_serial.feed("t12")
    with pytest.raises(WouldBlock):
        socket.read()
    mock_serial.feed("31AA\r")
    assert socket.read() == CanFrame.new(StandardId(0x123), b'\xaa')


def test_adapter_acks_are_skipped(socket, mock_serial) -> None:
    mock_serial.feed("\r\rz\rt0BC0\r")
    assert socket.read() == CanFrame.new(StandardId(0xBC))


def test_overflow_self_heals(socket, mock_serial) -> None:
    mock_serial.feed("t" + "0" * (SLCAN_MTU + 10) + "\r")
    with pytest.raises(WouldBlock):
        socket.read()

    mock_serial.feed("t12340B0E0E0F\r")
    assert socket.read() == CanFrame.new(StandardId(0x123), b'\x0b\x0e\x0e\x0f')


def test_bad_line_does_not_poison_next(socket, mock_serial) -> None:
    mock_serial.feed("t12G0\rV1013\rt1230\r")
    with pytest.raises(FrameError):
        socket.read()
    with pytest.raises(UnsupportedCommand):
        socket.read()
    assert socket.read() == CanFrame.new(StandardId(0x123))


def test_transport_errors_propagate(mock_serial) -> None:
    class BrokenPort(MockSerial):
        def read(self, size=1):
            raise serial.SerialException("device disconnected")

    with pytest.raises(serial.SerialException):
        CanSocket(BrokenPort()).read()


def test_reset(socket, mock_serial) -> None:
    mock_serial.feed("t123")
    with pytest.raises(WouldBlock):
        socket.read()
    socket.reset()
    mock_serial.feed("1AA\rt0BC0\r")
    assert socket.read() == CanFrame.new(StandardId(0xBC))


def test_loopback_over_pyserial() -> None:
    port = open_serial("loop://")
    try:
        can = CanSocket(port)
        can.open(BitRate.SETUP_250KBIT)
        can.write(ExtendedId(0x18DAF110), b'\x02\x10\x03')
        assert can.read() == CanFrame.new(ExtendedId(0x18DAF110), b'\x02\x10\x03')
        with pytest.raises(WouldBlock):
            can.read()
    finally:
        port.close()


def test_stalled_port_raises_timeout() -> None:
    class StalledPort(MockSerial):
        def write(self, data):
            return 0

    with pytest.raises(serial.SerialTimeoutException):
        CanSocket(StalledPort()).close()
