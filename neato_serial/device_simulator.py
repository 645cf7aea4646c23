#!/usr/bin/env python3
"""
device_simulator.py

This module implements stand-ins for the robot's serial port, for testing
without physical hardware. Both expose the link interface the driver uses:
read(size), write(data), flush(), close(), timeout and is_open.

ScriptedLink:
  - Replays a fixed sequence of lines (or raw bytes) and records every write.
  - Once the script is used up, read() returns b"" exactly like a pyserial
    port whose read timeout expired.

DeviceSimulator:
  - Emulates a D-Series robot controller. Each complete command line written
    to it queues the echo and response block the real robot would send.
  - Keeps an internal state (test mode, LDS rotation, wheel positions,
    backlight) so that commands affect later queries.
  - Query responses carry exactly the number of data lines the driver reads
    after each header; scans describe a square room around the robot.

Usage Example:
    simulator = DeviceSimulator(config={"room_half_width_mm": 1500})
    robot = DSeries(simulator, settle_delay=0.0)
    robot.set_testmode(Toggle.ON)
    print(robot.get_charger())
"""

import logging
import math
import random
from typing import Any, Dict, Iterable, List, Optional

import serial

from neato_serial.models import Toggle
from neato_serial.robots.commands.dseries_commands import (
    ANALOG_SENSOR_FIELDS,
    CHARGER_FIELDS,
    DIGITAL_SENSOR_FIELDS,
    MOTOR_FIELDS,
    DSeriesCommand,
)


class ScriptedLink:
    """
    A serial port double that replays scripted bytes and records writes.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None, data: bytes = b"",
                 timeout: float = 1.0, fail_reads: bool = False):
        """
        Initializes the ScriptedLink.

        Args:
            lines: Lines to replay; each gets a trailing newline.
            data: Raw bytes to replay after the lines.
            timeout: Reported read timeout (reads never block).
            fail_reads: Raise serial.SerialException on every read.
        """
        self._buffer = bytearray()
        self.timeout = timeout
        self.fail_reads = fail_reads
        self.is_open = True
        self.written: List[bytes] = []
        self.flush_count = 0
        if lines:
            self.feed(*lines)
        if data:
            self.feed_bytes(data)

    def feed(self, *lines: str) -> None:
        for line in lines:
            self._buffer += (line + "\n").encode("utf-8")

    def feed_bytes(self, data: bytes) -> None:
        self._buffer += data

    @property
    def remaining(self) -> int:
        return len(self._buffer)

    @property
    def commands(self) -> List[str]:
        """
        The command lines written so far, in order.
        """
        text = b"".join(self.written).decode("ascii")
        return [line for line in text.split("\n") if line]

    def read(self, size: int = 1) -> bytes:
        if self.fail_reads:
            raise serial.SerialException("device reports readiness to read but returned no data")
        chunk = bytes(self._buffer[:size])
        del self._buffer[:size]
        return chunk

    def write(self, data: bytes) -> int:
        self.written.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        self.flush_count += 1

    def close(self) -> None:
        self.is_open = False


class DeviceSimulator:
    """
    Simulates a D-Series robot controller on the far end of the serial link.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, logger: Optional[logging.Logger] = None):
        self.config = {
            "room_half_width_mm": 1500,    # square room centred on the robot
            "battery_voltage": 14.2,
            "fuel_percent": 87,
            "noise_level": 0.0,            # relative noise on analog readings
            "leading_noise": [],           # lines sent before every query header
        }
        self.config.update(config or {})
        self.logger = logger or logging.getLogger("DeviceSimulator")
        self.state = {
            "testmode": False,
            "lds_rotating": False,
            "backlight": True,
            "left_position_mm": 0,
            "right_position_mm": 0,
            "left_speed": 0,
            "right_speed": 0,
        }
        self.timeout = 1.0
        self.is_open = True
        self._pending = bytearray()
        self._output = bytearray()

    # --- link interface ---
    def read(self, size: int = 1) -> bytes:
        chunk = bytes(self._output[:size])
        del self._output[:size]
        return chunk

    def write(self, data: bytes) -> int:
        self._pending += data
        while b"\n" in self._pending:
            raw, _, rest = bytes(self._pending).partition(b"\n")
            self._pending = bytearray(rest)
            command = raw.decode("ascii", errors="replace").strip()
            if command:
                self._respond(command)
        return len(data)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.is_open = False

    # --- responses ---
    def _send(self, *lines: str) -> None:
        for line in lines:
            self._output += (line + "\r\n").encode("ascii")

    def _respond(self, command: str) -> None:
        self.logger.debug(f"Simulated command received: {command}")
        words = command.split()
        keyword = words[0].lower()
        args = words[1:]
        self._send(command)

        if keyword == DSeriesCommand.TESTMODE.keyword:
            self.state["testmode"] = self._toggle(args) is Toggle.ON
            return
        if keyword == DSeriesCommand.SET_LED.keyword:
            if args and args[0].startswith("backlight"):
                self.state["backlight"] = args[0] == "backlighton"
            return
        if keyword in (DSeriesCommand.LDS_ROTATION.keyword, DSeriesCommand.SET_MOTOR.keyword) \
                and not self.state["testmode"]:
            self._send("Unit must be in test mode to use this command.")
            return
        if keyword == DSeriesCommand.LDS_ROTATION.keyword:
            self.state["lds_rotating"] = self._toggle(args) is Toggle.ON
        elif keyword == DSeriesCommand.SET_MOTOR.keyword:
            self._drive(args)
        elif keyword == DSeriesCommand.LDS_SCAN.keyword:
            self._send_scan()
        elif keyword == DSeriesCommand.GET_MOTORS.keyword:
            self._send_block(DSeriesCommand.GET_MOTORS, self._motor_lines())
        elif keyword == DSeriesCommand.GET_ANALOG_SENSORS.keyword:
            self._send_block(DSeriesCommand.GET_ANALOG_SENSORS, self._analog_lines())
        elif keyword == DSeriesCommand.GET_DIGITAL_SENSORS.keyword:
            self._send_block(DSeriesCommand.GET_DIGITAL_SENSORS, self._digital_lines())
        elif keyword == DSeriesCommand.GET_CHARGER.keyword:
            self._send_block(DSeriesCommand.GET_CHARGER, self._charger_lines())
        else:
            self._send("Unknown Cmd: '" + command + "'")

    @staticmethod
    def _toggle(args: List[str]) -> Toggle:
        return Toggle.ON if args and args[0].lower() == Toggle.ON.value else Toggle.OFF

    def _drive(self, args: List[str]) -> None:
        try:
            left, right, speed = (int(arg) for arg in args[:3])
        except ValueError:
            self._send("Invalid setmotor arguments")
            return
        self.state["left_position_mm"] += left
        self.state["right_position_mm"] += right
        self.state["left_speed"] = speed if left else 0
        self.state["right_speed"] = speed if right else 0

    def _send_block(self, command, lines: List[str]) -> None:
        self._send(*self.config["leading_noise"])
        self._send(command.header)
        self._send(*lines[:command.line_count])

    def _send_scan(self) -> None:
        self._send("AngleInDegrees,DistInMM,Intensity,ErrorCodeHEX")
        half_width = self.config["room_half_width_mm"]
        for angle in range(360):
            if self.state["lds_rotating"]:
                radians = math.radians(angle)
                distance = int(half_width / max(abs(math.cos(radians)), abs(math.sin(radians))))
                self._send(f"{angle},{distance},1400,0")
            else:
                self._send(f"{angle},0,0,8035")
        self._send("ROTATION_SPEED,{:.2f}".format(5.0 if self.state["lds_rotating"] else 0.0))

    def _noisy(self, value: float) -> float:
        noise = abs(value) * self.config["noise_level"]
        return value + random.uniform(-noise, noise)

    def _motor_lines(self) -> List[str]:
        values = {
            "left_wheel_position_in_mm": self.state["left_position_mm"],
            "right_wheel_position_in_mm": self.state["right_position_mm"],
            "left_wheel_speed": self.state["left_speed"],
            "right_wheel_speed": self.state["right_speed"],
            "left_wheel_rpm": self.state["left_speed"] // 4,
            "right_wheel_rpm": self.state["right_speed"] // 4,
        }
        return [f"{name},{values.get(d.attribute, 0)}" for name, d in MOTOR_FIELDS.items()]

    def _analog_lines(self) -> List[str]:
        voltage = self.config["battery_voltage"]
        values = {
            "battery_voltage": (voltage * 1000, "mV"),
            "battery_current": (-120.0, "mA"),
            "battery_temperature": (24.5, "C"),
            "external_voltage": (0.0, "mV"),
            "accelerometer_z": (1000.0, "mG"),
        }
        lines = []
        for name, definition in ANALOG_SENSOR_FIELDS.items():
            value, unit = values.get(definition.attribute, (0.0, "mV"))
            lines.append(f"{name},{unit},{self._noisy(value):.3f}")
        return lines

    def _digital_lines(self) -> List[str]:
        values = {"sensor_dustbin_is_in": True}
        return [f"{name},{int(values.get(d.attribute, False))}" for name, d in DIGITAL_SENSOR_FIELDS.items()]

    def _charger_lines(self) -> List[str]:
        values = {
            "fuel_percent": str(self.config["fuel_percent"]),
            "confident_on_fuel": "1",
            "thermistor_present": "1",
            "charging_enabled": "1",
            "batt_temp_c_avg": "24",
            "v_batt_v": f"{self.config['battery_voltage']:.2f}",
            "v_ext_v": "0.00",
            "charger_mah": "0",
            "discharge_mah": "312",
        }
        return [f"{name},{values.get(d.attribute, '0')}" for name, d in CHARGER_FIELDS.items()]
