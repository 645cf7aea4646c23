"""
status_aggregator.py

Implements the status aggregators: each one sends a query command, waits for
the response header and folds the fixed-size data block that follows into one
immutable status record.

Lines are assigned through a name -> FieldDefinition table. Names outside the
table are diagnostic lines the robot is free to send; they are logged and
ignored, but must still decode with the record's fallback kinds.

Usage Example:
    aggregator = MotorStatusAggregator(commands, synchronizer)
    status = aggregator.collect()
    status = aggregator.fold(["Brush_RPM,1200", "Vacuum_RPM,0"])
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from neato_serial.communicator.command_protocol import CommandProtocol
from neato_serial.communicator.field_decoders import decode_field, field_name
from neato_serial.communicator.header_sync import HeaderSynchronizer
from neato_serial.errors import FieldParseError, ParseIntError
from neato_serial.models import AnalogSensorStatus, ChargerStatus, DigitalSensorStatus, MotorStatus
from neato_serial.param_types import CommandDefinition, FieldDefinition, FieldKind
from neato_serial.robots.commands.dseries_commands import (
    ANALOG_SENSOR_FIELDS,
    CHARGER_FIELDS,
    DIGITAL_SENSOR_FIELDS,
    FALLBACK_KINDS,
    MOTOR_FIELDS,
    DSeriesCommand,
)


class StatusAggregator:
    """
    Base class for query-and-fold status readers.
    Subclasses set the command, record class, field table and fallback kinds.
    """

    command: CommandDefinition
    status_class: type
    fields: Dict[str, FieldDefinition] = {}
    fallback_kinds: Tuple[FieldKind, ...] = ()

    def __init__(self, commands: CommandProtocol, synchronizer: HeaderSynchronizer,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the aggregator.

        Args:
            commands: Writes the query command and consumes its echo.
            synchronizer: Finds the response header on the same link.
            logger: Optional logger instance.
        """
        self.commands = commands
        self.synchronizer = synchronizer
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def collect(self) -> Any:
        """
        Queries the robot and returns a freshly built status record.

        Raises:
            LinkError, LineEncodingError, FieldParseError, SyncTimeoutError.
        """
        self.commands.send(self.command)
        self.logger.debug("Reading values...")
        self.synchronizer.synchronize(self.command.header)
        lines = self.synchronizer.framer.read_lines(self.command.line_count)
        self.logger.debug(f"Got {len(lines)} lines")
        return self.fold(lines)

    def fold(self, lines: Iterable[str]) -> Any:
        """
        Decodes the data lines of one response into a status record.
        Unset attributes keep their defaults.

        Args:
            lines: Data lines following the header.

        Returns:
            An instance of status_class.
        """
        values = {}
        for line in lines:
            self.logger.debug(f"line: {line}")
            if not line.strip():
                continue
            definition = self.fields.get(field_name(line))
            if definition is None:
                field = self._decode_unknown(line)
                self.logger.error(f"Unrecognized field: {field}")
                continue
            field = self._decode_known(line, definition)
            if field is None:
                continue
            self.logger.debug(f"field: {field}")
            values[definition.attribute] = field.value
        return self.status_class(**values)

    def _decode_known(self, line: str, definition: FieldDefinition):
        return decode_field(line, definition.kind)

    def _decode_unknown(self, line: str):
        error: Optional[FieldParseError] = None
        for kind in self.fallback_kinds:
            try:
                return decode_field(line, kind)
            except FieldParseError as e:
                if error is not None:
                    raise e from error
                error = e
        raise error


class MotorStatusAggregator(StatusAggregator):
    command = DSeriesCommand.GET_MOTORS
    status_class = MotorStatus
    fields = MOTOR_FIELDS
    fallback_kinds = FALLBACK_KINDS["motor"]


class AnalogSensorAggregator(StatusAggregator):
    command = DSeriesCommand.GET_ANALOG_SENSORS
    status_class = AnalogSensorStatus
    fields = ANALOG_SENSOR_FIELDS
    fallback_kinds = FALLBACK_KINDS["analog"]


class DigitalSensorAggregator(StatusAggregator):
    command = DSeriesCommand.GET_DIGITAL_SENSORS
    status_class = DigitalSensorStatus
    fields = DIGITAL_SENSOR_FIELDS
    fallback_kinds = FALLBACK_KINDS["digital"]


class ChargerStatusAggregator(StatusAggregator):
    """
    Charger lines are integers except the two battery/external voltages.
    Integer lines, known or not, fall back to float when the integer
    decode fails; a line that is neither is fatal.
    """
    command = DSeriesCommand.GET_CHARGER
    status_class = ChargerStatus
    fields = CHARGER_FIELDS
    fallback_kinds = FALLBACK_KINDS["charger"]

    def _decode_known(self, line: str, definition: FieldDefinition):
        """
        Integer lines that carry a float are logged as unrecognized and leave
        the attribute at its default. Only a value that is neither is fatal.
        """
        if definition.kind is not FieldKind.INT:
            return super()._decode_known(line, definition)
        try:
            return decode_field(line, FieldKind.INT)
        except ParseIntError as int_error:
            try:
                field = decode_field(line, FieldKind.FLOAT)
            except FieldParseError as e:
                raise e from int_error
        self.logger.error(f"Unrecognized field: {field}")
        return None
