"""
dseries_commands.py

Defines command definitions and status field tables for D-Series robots.
Each command is defined using the CommandDefinition data class; each status
line is mapped onto its record attribute by a FieldDefinition.
"""

from typing import Dict, Tuple

from neato_serial.param_types import CommandDefinition, CommandShape, FieldDefinition, FieldKind


class DSeriesCommand:
    """
    Contains command definitions for the D-Series robot controller.
    """
    TESTMODE = CommandDefinition(
        keyword="testmode",
        description="Enter or leave test mode",
        shape=CommandShape.HANDSHAKE,
        confirm="testmode"
    )

    LDS_ROTATION = CommandDefinition(
        keyword="setldsrotation",
        description="Start or stop the laser distance sensor turret",
        shape=CommandShape.SETTLE
    )

    LDS_SCAN = CommandDefinition(
        keyword="getldsscan",
        description="Request one revolution of laser distance readings",
        shape=CommandShape.ECHO
    )

    SET_MOTOR = CommandDefinition(
        keyword="setmotor",
        description="Drive the wheels: left distance, right distance, speed",
        shape=CommandShape.ECHO
    )

    SET_LED = CommandDefinition(
        keyword="setled",
        description="Switch the display backlight",
        shape=CommandShape.ECHO
    )

    GET_MOTORS = CommandDefinition(
        keyword="getmotors",
        description="Read motor speeds, currents and wheel positions",
        shape=CommandShape.QUERY,
        header="Parameter,Value",
        line_count=12
    )

    GET_ANALOG_SENSORS = CommandDefinition(
        keyword="getanalogsensors",
        description="Read battery, accelerometer and proximity sensor values",
        shape=CommandShape.QUERY,
        header="SensorName,Unit,Value",
        line_count=13
    )

    GET_DIGITAL_SENSORS = CommandDefinition(
        keyword="getdigitalsensors",
        description="Read dock, dustbin, wheel drop and bumper switches",
        shape=CommandShape.QUERY,
        header="Digital Sensor Name, Value",
        line_count=9
    )

    GET_CHARGER = CommandDefinition(
        keyword="getcharger",
        description="Read fuel gauge and charger state",
        shape=CommandShape.QUERY,
        header="Label,Value",
        line_count=14
    )


def _table(*definitions: FieldDefinition) -> Dict[str, FieldDefinition]:
    return {definition.name: definition for definition in definitions}


MOTOR_FIELDS = _table(
    FieldDefinition("Brush_RPM", "brush_rpm", FieldKind.INT),
    FieldDefinition("Brush_mA", "brush_ma", FieldKind.INT),
    FieldDefinition("Vacuum_RPM", "vacuum_rpm", FieldKind.INT),
    FieldDefinition("Vacuum_mA", "vacuum_ma", FieldKind.INT),
    FieldDefinition("LeftWheel_RPM", "left_wheel_rpm", FieldKind.INT),
    FieldDefinition("LeftWheel_Load%", "left_wheel_load", FieldKind.INT),
    FieldDefinition("LeftWheel_PositionInMM", "left_wheel_position_in_mm", FieldKind.INT),
    FieldDefinition("LeftWheel_Speed", "left_wheel_speed", FieldKind.INT),
    FieldDefinition("RightWheel_RPM", "right_wheel_rpm", FieldKind.INT),
    FieldDefinition("RightWheel_Load%", "right_wheel_load", FieldKind.INT),
    FieldDefinition("RightWheel_PositionInMM", "right_wheel_position_in_mm", FieldKind.INT),
    FieldDefinition("RightWheel_Speed", "right_wheel_speed", FieldKind.INT),
    FieldDefinition("SideBrush_mA", "side_brush_ma", FieldKind.INT),
)

ANALOG_SENSOR_FIELDS = _table(
    FieldDefinition("BatteryVoltage", "battery_voltage", FieldKind.UNIT_FLOAT),
    FieldDefinition("BatteryCurrent", "battery_current", FieldKind.UNIT_FLOAT),
    FieldDefinition("BatteryTemperature", "battery_temperature", FieldKind.UNIT_FLOAT),
    FieldDefinition("ExternalVoltage", "external_voltage", FieldKind.UNIT_FLOAT),
    FieldDefinition("AccelerometerX", "accelerometer_x", FieldKind.UNIT_FLOAT),
    FieldDefinition("AccelerometerY", "accelerometer_y", FieldKind.UNIT_FLOAT),
    FieldDefinition("AccelerometerZ", "accelerometer_z", FieldKind.UNIT_FLOAT),
    FieldDefinition("VacuumCurrent", "vacuum_current", FieldKind.UNIT_FLOAT),
    FieldDefinition("SideBrushCurrent", "side_brush_current", FieldKind.UNIT_FLOAT),
    FieldDefinition("MagSensorLeft", "mag_sensor_left", FieldKind.UNIT_FLOAT),
    FieldDefinition("MagSensorRight", "mag_sensor_right", FieldKind.UNIT_FLOAT),
    FieldDefinition("WallSensor", "wall_sensor", FieldKind.UNIT_FLOAT),
    FieldDefinition("DropSensorLeft", "drop_sensor_left", FieldKind.UNIT_FLOAT),
    FieldDefinition("DropSensorRight", "drop_sensor_right", FieldKind.UNIT_FLOAT),
)

DIGITAL_SENSOR_FIELDS = _table(
    FieldDefinition("SNSR_DC_JACK_IS_IN", "sensor_dc_jack_is_in", FieldKind.BOOL),
    FieldDefinition("SNSR_DUSTBIN_IS_IN", "sensor_dustbin_is_in", FieldKind.BOOL),
    FieldDefinition("SNSR_LEFT_WHEEL_EXTENDED", "sensor_left_wheel_extended", FieldKind.BOOL),
    FieldDefinition("SNSR_RIGHT_WHEEL_EXTENDED", "sensor_right_wheel_extended", FieldKind.BOOL),
    FieldDefinition("LSIDEBIT", "left_sidebit", FieldKind.BOOL),
    FieldDefinition("LFRONTBIT", "left_frontbit", FieldKind.BOOL),
    FieldDefinition("LLDSBIT", "left_ldsbit", FieldKind.BOOL),
    FieldDefinition("RSIDEBIT", "right_sidebit", FieldKind.BOOL),
    FieldDefinition("RFRONTBIT", "right_frontbit", FieldKind.BOOL),
    FieldDefinition("RLDSBIT", "right_ldsbit", FieldKind.BOOL),
)

# The only record mixing integer and float lines.
CHARGER_FIELDS = _table(
    FieldDefinition("FuelPercent", "fuel_percent", FieldKind.INT),
    FieldDefinition("BatteryOverTemp", "battery_over_temp", FieldKind.INT),
    FieldDefinition("ChargingActive", "charging_active", FieldKind.INT),
    FieldDefinition("ChargingEnabled", "charging_enabled", FieldKind.INT),
    FieldDefinition("ConfidentOnFuel", "confident_on_fuel", FieldKind.INT),
    FieldDefinition("OnReservedFuel", "on_reserved_fuel", FieldKind.INT),
    FieldDefinition("EmptyFuel", "empty_fuel", FieldKind.INT),
    FieldDefinition("BatteryFailure", "battery_failure", FieldKind.INT),
    FieldDefinition("ExtPwrPresent", "ext_pwr_present", FieldKind.INT),
    FieldDefinition("ThermistorPresent", "thermistor_present", FieldKind.INT),
    FieldDefinition("BattTempCAvg", "batt_temp_c_avg", FieldKind.INT),
    FieldDefinition("VBattV", "v_batt_v", FieldKind.FLOAT),
    FieldDefinition("VExtV", "v_ext_v", FieldKind.FLOAT),
    FieldDefinition("Charger_mAH", "charger_mah", FieldKind.INT),
    FieldDefinition("Discharge_mAH", "discharge_mah", FieldKind.INT),
)

# Kinds tried, in order, for lines whose name is not in a record's table.
FALLBACK_KINDS: Dict[str, Tuple[FieldKind, ...]] = {
    "motor": (FieldKind.INT,),
    "analog": (FieldKind.UNIT_FLOAT,),
    "digital": (FieldKind.BOOL,),
    "charger": (FieldKind.INT, FieldKind.FLOAT),
}
