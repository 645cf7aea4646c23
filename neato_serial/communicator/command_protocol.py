"""
command_protocol.py

Implements the CommandProtocol class which writes ASCII commands to the robot
and consumes whatever read-back each command shape requires:

  - echo:        write, read one line (best effort)
  - query:       write, echo, flush; the caller then reads the data block
  - handshake:   write, poll lines until the confirm keyword appears
  - settle:      write, echo, flush, then wait for the hardware to spin up

The protocol is half-duplex: a command's response is fully consumed before the
next command is written.
"""

import logging
import time
from typing import Any, Callable, Optional

import serial

from neato_serial.communicator.line_framer import LineFramer
from neato_serial.errors import HandshakeTimeoutError, LinkError, NeatoError
from neato_serial.param_types import CommandDefinition, CommandShape


class CommandProtocol:
    """
    Builds, writes and sequences robot commands over a serial link.
    """

    def __init__(self, link: Any, framer: LineFramer, settle_delay: float = 5.0,
                 max_handshake_lines: Optional[int] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the CommandProtocol.

        Args:
            link: The byte stream to write to (e.g., serial.Serial).
            framer: Line source sharing the same link.
            settle_delay: Seconds to wait after a settle-shaped command.
            max_handshake_lines: Lines to poll for a handshake; None polls forever.
            sleep: Function used for the settle wait.
            logger: Optional logger instance.
        """
        self.link = link
        self.framer = framer
        self.settle_delay = settle_delay
        self.max_handshake_lines = max_handshake_lines
        self._sleep = sleep
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @staticmethod
    def build_command(keyword: str, *args: Any) -> str:
        """
        Creates the command text: the keyword followed by space-separated arguments.

        Args:
            keyword: The command word (e.g., "setmotor").
            args: Arguments, passed through verbatim.

        Returns:
            The command line without its terminator.
        """
        return " ".join([keyword] + [str(arg) for arg in args])

    def write_command(self, command: str) -> None:
        """
        Writes one newline-terminated command line.
        """
        self.logger.debug(f"Sending command: {command}")
        try:
            self.link.write((command + "\n").encode("ascii"))
        except (serial.SerialException, OSError) as e:
            raise LinkError(f"Could not write {command!r} to serial port: {e}") from e

    def flush(self) -> None:
        try:
            self.link.flush()
        except (serial.SerialException, OSError) as e:
            raise LinkError(f"Could not flush serial port: {e}") from e

    def read_echo(self) -> Optional[str]:
        """
        Reads the one-line echo of the last command. The echo is advisory:
        read failures are logged and None is returned.
        """
        try:
            line = self.framer.read_line()
        except NeatoError as e:
            self.logger.warning(f"Error reading back: {e}")
            return None
        self.logger.debug(f"Echo: {line}")
        return line

    def send_with_echo(self, command: str) -> Optional[str]:
        self.write_command(command)
        echo = self.read_echo()
        self.flush()
        return echo

    def send_query(self, command: str) -> None:
        """
        Writes a query command and consumes its echo. The header and data
        block are left on the link for the caller.
        """
        self.write_command(command)
        self.read_echo()
        self.flush()
        self.logger.debug("Serial port flushed")

    def handshake(self, command: str, confirm: str) -> str:
        """
        Writes a command and polls until a line containing `confirm` is read.

        Args:
            command: The command line to write.
            confirm: Substring proving the robot is in sync.

        Returns:
            The confirming line.

        Raises:
            HandshakeTimeoutError: If max_handshake_lines lines went by unconfirmed.
        """
        self.write_command(command)
        polled = 0
        while self.max_handshake_lines is None or polled < self.max_handshake_lines:
            polled += 1
            try:
                line = self.framer.read_line()
            except NeatoError as e:
                self.logger.warning(f"Error reading back: {e}")
                continue
            self.logger.debug(line)
            if confirm in line:
                self.logger.info("Serial port synced.")
                self.flush()
                return line
            self.logger.debug("Serial port not yet in sync")
        raise HandshakeTimeoutError(f"No {confirm!r} echo within {self.max_handshake_lines} lines")

    def send_with_settle(self, command: str) -> Optional[str]:
        """
        Writes a command, consumes its echo, flushes and waits settle_delay
        seconds for the actuator to come up to speed.
        """
        echo = self.send_with_echo(command)
        self.logger.info(f"Waiting {self.settle_delay:.1f}s for the hardware to settle")
        self._sleep(self.settle_delay)
        return echo

    def send(self, command: CommandDefinition, *args: Any) -> Optional[str]:
        """
        Builds a command from its definition and sends it with the read-back
        its shape requires.

        Args:
            command: The command definition (keyword, shape, confirm).
            args: Arguments appended to the keyword.

        Returns:
            The echo or confirming line; None for queries and missing echoes.
        """
        text = self.build_command(command.keyword, *args)
        self.logger.debug(f"{command.description} ({command.shape.value})")
        if command.shape is CommandShape.HANDSHAKE:
            return self.handshake(text, command.confirm)
        if command.shape is CommandShape.SETTLE:
            return self.send_with_settle(text)
        if command.shape is CommandShape.QUERY:
            self.send_query(text)
            return None
        return self.send_with_echo(text)
