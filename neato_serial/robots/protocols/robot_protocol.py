#!/usr/bin/env python3
"""
robot_protocol.py

This module defines the abstract base class for robot protocols. Every robot
model implementation must inherit from this class and implement the mode
toggles, scan, motor and status operations below.

Usage Example:
    robot = SomeRobot(serial_port)
    robot.set_testmode(Toggle.ON)
    status = robot.get_motors()
    robot.exit()
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from neato_serial.models import (
    AnalogSensorStatus,
    ChargerStatus,
    DigitalSensorStatus,
    MotorStatus,
    Toggle,
)


class NeatoRobot(ABC):
    """
    Abstract base class for robot protocols.
    Provides a standardized interface over one exclusively owned serial link.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def exit(self) -> None:
        """
        Leaves the robot in a safe state: the LDS turret is stopped before test
        mode is left, since test mode gates the rotation command.
        """
        self.set_ldsrotation(Toggle.OFF)
        self.set_testmode(Toggle.OFF)

    @abstractmethod
    def set_testmode(self, value: Toggle) -> None:
        """
        Enters or leaves test mode, waiting until the robot confirms.
        """
        pass

    @abstractmethod
    def set_ldsrotation(self, value: Toggle) -> None:
        """
        Starts or stops the laser distance sensor turret.
        """
        pass

    @abstractmethod
    def request_scan(self) -> None:
        pass

    @abstractmethod
    def get_scan_ranges(self) -> List[float]:
        """
        Returns the ranges of the requested scan, in metres.
        """
        pass

    @abstractmethod
    def set_motors(self, left_distance: int, right_distance: int, speed: int) -> None:
        """
        Drives the wheels. Values are passed to the robot unconverted.
        """
        pass

    @abstractmethod
    def get_motors(self) -> MotorStatus:
        pass

    @abstractmethod
    def get_analog_sensors(self) -> AnalogSensorStatus:
        pass

    @abstractmethod
    def get_digital_sensors(self) -> DigitalSensorStatus:
        pass

    @abstractmethod
    def get_charger(self) -> ChargerStatus:
        pass

    @abstractmethod
    def set_backlight(self, value: Toggle) -> None:
        pass

    @abstractmethod
    def read_line(self) -> str:
        pass

    @abstractmethod
    def read_lines(self, line_count: int) -> List[str]:
        pass
