"""
errors.py

Defines the exception hierarchy raised by the robot protocol layer.

Link and framing faults propagate to the caller of the operation that
triggered them. Echo reads on fire-and-forget commands catch NeatoError,
log it and carry on.
"""


class NeatoError(Exception):
    """
    Base class for every error raised by the neato_serial package.
    """
    pass


class LinkError(NeatoError):
    """
    Raised when reading, writing or flushing the serial link fails.
    """
    pass


class LinkTimeoutError(LinkError):
    """
    Raised when a read returns no data within the link timeout.
    """
    pass


class LineEncodingError(NeatoError):
    """
    Raised when the bytes of a line are not valid text.
    """
    pass


class LineTooLongError(NeatoError):
    """
    Raised in strict framing mode when the byte budget is used up before a newline.
    """
    pass


class FieldParseError(NeatoError, ValueError):
    """
    Base class for errors decoding a CSV-like field line.
    """

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class ParseIntError(FieldParseError):
    """
    Raised when the value part of a field is not a valid decimal integer.
    """
    pass


class ParseFloatError(FieldParseError):
    """
    Raised when the value part of a field is not a valid floating-point number.
    """
    pass


class FieldShapeError(FieldParseError):
    """
    Raised when a line splits into fewer comma-separated parts than its field shape needs.
    """
    pass


class SyncTimeoutError(NeatoError):
    """
    Raised when a bounded header search reads its budget of lines without a match.
    """
    pass


class HandshakeTimeoutError(SyncTimeoutError):
    """
    Raised when a bounded handshake never sees its keyword echoed back.
    """
    pass
