"""
header_sync.py

Implements the HeaderSynchronizer class. Every query response starts with a
one-line column header; lines before it (echoes, prompts, stale output) are
discarded until a line containing the expected header text appears.
"""

import logging
from typing import Optional

from neato_serial.communicator.line_framer import LineFramer
from neato_serial.errors import SyncTimeoutError


class HeaderSynchronizer:
    """
    Consumes lines until one contains the expected header substring.
    """

    def __init__(self, framer: LineFramer, max_lines: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the HeaderSynchronizer.

        Args:
            framer: The line source.
            max_lines: Lines to read before giving up; None waits forever.
            logger: Optional logger instance.
        """
        self.framer = framer
        self.max_lines = max_lines
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def synchronize(self, header: str) -> str:
        """
        Reads and discards lines until the header is found.

        Args:
            header: Substring identifying the header line.

        Returns:
            The matching header line.

        Raises:
            SyncTimeoutError: If max_lines lines were read without a match.
        """
        seen = 0
        while self.max_lines is None or seen < self.max_lines:
            line = self.framer.read_line()
            seen += 1
            if header in line:
                self.logger.debug(f"Synchronized on header: {line}")
                return line
            self.logger.debug(f"Discarding line while waiting for {header!r}: {line}")
        raise SyncTimeoutError(f"Header {header!r} not found within {self.max_lines} lines")
