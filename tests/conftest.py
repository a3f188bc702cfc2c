import pytest


class MockSerial:
    """In-memory stand-in for serial.Serial with separate RX and TX buffers."""

    def __init__(self, max_write=None):
        self.rx = bytearray()
        self.tx = bytearray()
        self.max_write = max_write
        self.is_open = True

    def feed(self, data):
        if isinstance(data, str):
            data = data.encode('ascii')
        self.rx += data

    def take_tx(self) -> str:
        out = self.tx.decode('ascii')
        self.tx.clear()
        return out

    def read(self, size=1):
        chunk = bytes(self.rx[:size])
        del self.rx[:size]
        return chunk

    def write(self, data):
        data = bytes(data)
        if self.max_write is not None:
            data = data[:self.max_write]
        self.tx += data
        return len(data)


@pytest.fixture
def mock_serial():
    return MockSerial()


@pytest.fixture
def socket(mock_serial):
    from slcan import CanSocket

    return CanSocket(mock_serial)
