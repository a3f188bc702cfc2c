"""Exception hierarchy for the SLCAN codec.

Every failure that only concerns a single received line derives from
:class:`FrameError`. The reassembler has already reset by the time one of
these is raised, so the caller can simply call ``read()`` again.
"""


class SlcanError(Exception):
    """Base class for all SLCAN codec errors."""


class FrameError(SlcanError, ValueError):
    """A line or frame failed validation. Never fatal for the channel."""


class MalformedHex(FrameError):
    """A character that should be a hex digit is not one."""


class InvalidLength(FrameError):
    """Data length code above 8, or a line too short for its declared length."""


class IdentifierOutOfRange(FrameError):
    """Identifier does not fit the 11-bit or 29-bit range of its class."""


class UnsupportedCommand(FrameError):
    """Leading byte is not a data frame command."""


class WouldBlock(SlcanError, BlockingIOError):
    """The transport has no data available right now; poll again later."""
