"""
line_framer.py

Implements the LineFramer class which turns the robot's byte stream into
newline-terminated text lines.

The link is any object exposing read(size) -> bytes; a pyserial port returns
b"" when its read timeout expires, which is reported as LinkTimeoutError.

Usage Example:
    framer = LineFramer(serial_port)
    header = framer.read_line()
    rows = framer.read_lines(12)
"""

import logging
from typing import Any, List, Optional

import serial

from neato_serial.errors import LineEncodingError, LineTooLongError, LinkError, LinkTimeoutError

NEWLINE = b"\n"


class LineFramer:
    """
    Reads bounded, newline-delimited lines from a serial link.
    """

    def __init__(self, link: Any, max_line_bytes: int = 99, strict: bool = False,
                 encoding: str = "utf-8", logger: Optional[logging.Logger] = None):
        """
        Initializes the LineFramer.

        Args:
            link: The byte stream to read from (e.g., serial.Serial).
            max_line_bytes: Byte budget per line, newline included.
            strict: Raise LineTooLongError instead of returning a truncated line.
            encoding: Text encoding of the protocol.
            logger: Optional logger instance.
        """
        if max_line_bytes < 1:
            raise ValueError("max_line_bytes must be positive")
        self.link = link
        self.max_line_bytes = max_line_bytes
        self.strict = strict
        self.encoding = encoding
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def _read_byte(self) -> bytes:
        try:
            byte = self.link.read(1)
        except (serial.SerialException, OSError) as e:
            raise LinkError(f"Serial read failed: {e}") from e
        if not byte:
            raise LinkTimeoutError("Timed out waiting for data from the robot")
        return byte

    def read_line(self) -> str:
        """
        Reads one line, without its newline.

        Returns:
            The decoded line. If the byte budget runs out first, the bytes read
            so far are decoded and returned (or LineTooLongError in strict mode).
        """
        buffer = bytearray()
        for _ in range(self.max_line_bytes):
            byte = self._read_byte()
            if byte == NEWLINE:
                return self._decode(buffer)
            buffer += byte

        if self.strict:
            raise LineTooLongError(f"No newline within {self.max_line_bytes} bytes")
        self.logger.warning(f"Line truncated at {self.max_line_bytes} bytes")
        return self._decode(buffer)

    def read_lines(self, count: int) -> List[str]:
        """
        Reads a fixed number of lines.

        Args:
            count: How many lines to read.

        Returns:
            The lines in arrival order.
        """
        return [self.read_line() for _ in range(count)]

    def _decode(self, buffer: bytearray) -> str:
        try:
            return buffer.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise LineEncodingError(f"Invalid {self.encoding} in line {bytes(buffer)!r}") from e
