#!/usr/bin/env python3
"""
serial_link.py

This module provides functions to open and list the serial ports a robot can
be reached on. The robot's controller enumerates as a USB CDC device
(e.g., /dev/ttyACM0) and talks 8N1.

Usage Example:
    from neato_serial.communicator.serial_link import open_serial_link
    ser = open_serial_link(port="/dev/ttyACM0", baudrate=115200, timeout=1.0)
"""

from typing import List

import serial
from serial.tools import list_ports

from neato_serial.errors import LinkError


def open_serial_link(port: str, baudrate: int = 115200, timeout: float = 1.0,
                     write_timeout: float = 1.0, bytesize: int = serial.EIGHTBITS,
                     parity: str = serial.PARITY_NONE,
                     stopbits: float = serial.STOPBITS_ONE) -> serial.Serial:
    """
    Opens and returns a serial.Serial object for robot communication.

    Args:
        port (str): Serial port (e.g., "COM3" or "/dev/ttyACM0").
        baudrate (int): Communication baud rate.
        timeout (float): Read timeout in seconds; every line read may block this long.
        write_timeout (float): Write timeout in seconds.
        bytesize (int): Number of data bits.
        parity (str): Parity setting ("N", "E", "O", etc.).
        stopbits (float): Number of stop bits.

    Returns:
        serial.Serial: An open serial port object.

    Raises:
        LinkError: If the port cannot be opened.
    """
    try:
        ser = serial.Serial(
            port=port,
            baudrate=baudrate,
            bytesize=bytesize,
            parity=parity,
            stopbits=stopbits,
            timeout=timeout,
            write_timeout=write_timeout
        )
    except (serial.SerialException, ValueError) as e:
        raise LinkError(f"Could not open {port}: {e}") from e
    ser.reset_input_buffer()
    ser.reset_output_buffer()
    return ser


def list_serial_ports() -> List[str]:
    """
    Lists available serial ports.

    Returns:
        A list of available port names.
    """
    return [p.device for p in list_ports.comports()]
