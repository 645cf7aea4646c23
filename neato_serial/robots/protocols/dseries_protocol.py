"""
dseries_protocol.py

Implements the DSeries robot, the production NeatoRobot. It owns the serial
link for its whole lifetime, wires the framer, header synchronizer, command
protocol, scan reader and status aggregators onto it, and caches the latest
snapshot of each status record.
"""

import logging
import time
from typing import Any, Callable, List, Optional

from neato_serial.communicator.command_protocol import CommandProtocol
from neato_serial.communicator.header_sync import HeaderSynchronizer
from neato_serial.communicator.line_framer import LineFramer
from neato_serial.communicator.scan_reader import ScanReader
from neato_serial.communicator.status_aggregator import (
    AnalogSensorAggregator,
    ChargerStatusAggregator,
    DigitalSensorAggregator,
    MotorStatusAggregator,
)
from neato_serial.models import (
    AnalogSensorStatus,
    ChargerStatus,
    DigitalSensorStatus,
    MotorStatus,
    Toggle,
)
from neato_serial.robots.commands.dseries_commands import DSeriesCommand
from neato_serial.robots.protocols.robot_protocol import NeatoRobot


class DSeries(NeatoRobot):
    """
    Protocol implementation for D-Series robots.
    """

    def __init__(self, link: Any, max_line_bytes: int = 99, strict_line_length: bool = False,
                 encoding: str = "utf-8", settle_delay: float = 5.0, scan_line_budget: int = 362,
                 max_sync_lines: Optional[int] = None, max_handshake_lines: Optional[int] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the DSeries robot.

        Args:
            link: Open byte stream to the robot (e.g., serial.Serial).
            max_line_bytes: Byte budget per response line.
            strict_line_length: Raise instead of truncating over-long lines.
            encoding: Text encoding of the protocol.
            settle_delay: Seconds to wait after toggling LDS rotation.
            scan_line_budget: Maximum lines read for one scan.
            max_sync_lines: Header search bound; None waits forever.
            max_handshake_lines: Test mode handshake bound; None waits forever.
            sleep: Function used for the settle wait.
            logger: Optional logger instance.
        """
        super().__init__(logger)
        self.link = link
        self.framer = LineFramer(link, max_line_bytes, strict_line_length, encoding,
                                 logger=self.logger.getChild("framer"))
        self.commands = CommandProtocol(link, self.framer, settle_delay, max_handshake_lines,
                                        sleep=sleep, logger=self.logger.getChild("commands"))
        self.synchronizer = HeaderSynchronizer(self.framer, max_sync_lines,
                                               logger=self.logger.getChild("sync"))
        self.scan_reader = ScanReader(self.framer, scan_line_budget,
                                      logger=self.logger.getChild("scan"))
        self._motors = MotorStatusAggregator(self.commands, self.synchronizer,
                                             logger=self.logger.getChild("motors"))
        self._analog_sensors = AnalogSensorAggregator(self.commands, self.synchronizer,
                                                      logger=self.logger.getChild("analog"))
        self._digital_sensors = DigitalSensorAggregator(self.commands, self.synchronizer,
                                                        logger=self.logger.getChild("digital"))
        self._charger = ChargerStatusAggregator(self.commands, self.synchronizer,
                                                logger=self.logger.getChild("charger"))

        self._motor_status = MotorStatus()
        self._analog_sensor_status = AnalogSensorStatus()
        self._digital_sensor_status = DigitalSensorStatus()
        self._charger_status = ChargerStatus()

    def __str__(self) -> str:
        return "\n".join([
            self._motor_status.describe(),
            self._analog_sensor_status.describe(),
            self._digital_sensor_status.describe(),
            self._charger_status.describe(),
        ])

    @property
    def motor_status(self) -> MotorStatus:
        return self._motor_status

    @property
    def analog_sensor_status(self) -> AnalogSensorStatus:
        return self._analog_sensor_status

    @property
    def digital_sensor_status(self) -> DigitalSensorStatus:
        return self._digital_sensor_status

    @property
    def charger_status(self) -> ChargerStatus:
        return self._charger_status

    def set_testmode(self, value: Toggle) -> None:
        self.logger.debug("Setting testmode")
        self.commands.send(DSeriesCommand.TESTMODE, value)
        self.logger.debug("Set testmode")

    def set_ldsrotation(self, value: Toggle) -> None:
        self.logger.debug("Setting ldsrotation")
        self.commands.send(DSeriesCommand.LDS_ROTATION, value)
        self.logger.debug("Set ldsrotation")

    def request_scan(self) -> None:
        self.logger.debug("Requesting scan")
        self.commands.send(DSeriesCommand.LDS_SCAN)
        self.logger.debug("Requested scan")

    def get_scan_ranges(self) -> List[float]:
        return self.scan_reader.read_ranges()

    def set_motors(self, left_distance: int, right_distance: int, speed: int) -> None:
        self.logger.debug(f"set_motors({left_distance}, {right_distance}, {speed})")
        self.commands.send(DSeriesCommand.SET_MOTOR, left_distance, right_distance, speed)
        self.logger.debug("Set motors")

    def get_motors(self) -> MotorStatus:
        self.logger.debug("get_motors")
        self._motor_status = self._motors.collect()
        return self._motor_status

    def get_analog_sensors(self) -> AnalogSensorStatus:
        self.logger.debug("get_analog_sensors")
        self._analog_sensor_status = self._analog_sensors.collect()
        return self._analog_sensor_status

    def get_digital_sensors(self) -> DigitalSensorStatus:
        self.logger.debug("get_digital_sensors")
        self._digital_sensor_status = self._digital_sensors.collect()
        return self._digital_sensor_status

    def get_charger(self) -> ChargerStatus:
        self.logger.debug("get_charger")
        self._charger_status = self._charger.collect()
        return self._charger_status

    def set_backlight(self, value: Toggle) -> None:
        self.commands.send(DSeriesCommand.SET_LED, f"backlight{value}")

    def read_line(self) -> str:
        return self.framer.read_line()

    def read_lines(self, line_count: int) -> List[str]:
        return self.framer.read_lines(line_count)
