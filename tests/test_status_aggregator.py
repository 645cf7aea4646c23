import logging
import random
import unittest

from neato_serial.communicator.command_protocol import CommandProtocol
from neato_serial.communicator.header_sync import HeaderSynchronizer
from neato_serial.communicator.line_framer import LineFramer
from neato_serial.communicator.status_aggregator import (
    AnalogSensorAggregator,
    ChargerStatusAggregator,
    DigitalSensorAggregator,
    MotorStatusAggregator,
)
from neato_serial.device_simulator import ScriptedLink
from neato_serial.errors import FieldShapeError, ParseFloatError, ParseIntError, SyncTimeoutError
from neato_serial.models import AnalogSensorStatus, ChargerStatus, DigitalSensorStatus, MotorStatus

MOTOR_LINES = [
    "Brush_RPM,1200",
    "Brush_mA,310",
    "Vacuum_RPM,9000",
    "Vacuum_mA,700",
    "LeftWheel_RPM,30",
    "LeftWheel_Load%,12",
    "LeftWheel_PositionInMM,-150",
    "LeftWheel_Speed,50",
    "RightWheel_RPM,31",
    "RightWheel_Load%,11",
    "RightWheel_PositionInMM,148",
    "RightWheel_Speed,49",
]

EXPECTED_MOTORS = MotorStatus(
    brush_rpm=1200, brush_ma=310, vacuum_rpm=9000, vacuum_ma=700,
    left_wheel_rpm=30, left_wheel_load=12, left_wheel_position_in_mm=-150, left_wheel_speed=50,
    right_wheel_rpm=31, right_wheel_load=11, right_wheel_position_in_mm=148, right_wheel_speed=49,
)


def make_aggregator(aggregator_class, lines, max_sync_lines=None):
    link = ScriptedLink(lines)
    framer = LineFramer(link)
    commands = CommandProtocol(link, framer, sleep=lambda seconds: None)
    synchronizer = HeaderSynchronizer(framer, max_sync_lines)
    logger = logging.getLogger(f"test.{aggregator_class.__name__}")
    return aggregator_class(commands, synchronizer, logger=logger), link


class MotorStatusAggregatorTest(unittest.TestCase):
    def test_fold_is_order_independent(self):
        aggregator, _ = make_aggregator(MotorStatusAggregator, [])
        shuffled = list(MOTOR_LINES)
        random.Random(7).shuffle(shuffled)
        self.assertEqual(aggregator.fold(shuffled), EXPECTED_MOTORS)
        self.assertEqual(aggregator.fold(MOTOR_LINES), EXPECTED_MOTORS)

    def test_fold_includes_side_brush(self):
        aggregator, _ = make_aggregator(MotorStatusAggregator, [])
        self.assertEqual(aggregator.fold(["SideBrush_mA,40"]).side_brush_ma, 40)

    def test_unknown_name_is_logged_and_ignored(self):
        aggregator, _ = make_aggregator(MotorStatusAggregator, [])
        with self.assertLogs(aggregator.logger, level="ERROR"):
            status = aggregator.fold(["Mystery,5", "Brush_RPM,100"])
        self.assertEqual(status, MotorStatus(brush_rpm=100))

    def test_unknown_name_must_still_decode(self):
        aggregator, _ = make_aggregator(MotorStatusAggregator, [])
        with self.assertRaises(ParseIntError):
            aggregator.fold(["Mystery,abc"])

    def test_blank_lines_are_skipped(self):
        aggregator, _ = make_aggregator(MotorStatusAggregator, [])
        self.assertEqual(aggregator.fold(["", "  ", "Vacuum_RPM,1"]), MotorStatus(vacuum_rpm=1))

    def test_parse_failure_is_fatal(self):
        aggregator, _ = make_aggregator(MotorStatusAggregator, [])
        with self.assertRaises(ParseIntError):
            aggregator.fold(["Brush_RPM,fast"])

    def test_collect(self):
        aggregator, link = make_aggregator(
            MotorStatusAggregator, ["getmotors", "stale", "Parameter,Value"] + MOTOR_LINES
        )
        self.assertEqual(aggregator.collect(), EXPECTED_MOTORS)
        self.assertEqual(link.commands, ["getmotors"])
        self.assertEqual(link.remaining, 0)

    def test_collect_builds_a_fresh_record(self):
        aggregator, link = make_aggregator(
            MotorStatusAggregator, ["getmotors", "Parameter,Value"] + MOTOR_LINES
        )
        self.assertEqual(aggregator.collect(), EXPECTED_MOTORS)
        link.feed("getmotors", "Parameter,Value", "Brush_RPM,5", *[""] * 11)
        self.assertEqual(aggregator.collect(), MotorStatus(brush_rpm=5))

    def test_collect_header_bound(self):
        aggregator, _ = make_aggregator(
            MotorStatusAggregator, ["getmotors", "a", "b", "Parameter,Value"] + MOTOR_LINES, max_sync_lines=2
        )
        with self.assertRaises(SyncTimeoutError):
            aggregator.collect()


class AnalogSensorAggregatorTest(unittest.TestCase):
    def test_fold_drops_units(self):
        aggregator, _ = make_aggregator(AnalogSensorAggregator, [])
        status = aggregator.fold([
            "BatteryVoltage,mV,14200.5",
            "BatteryCurrent,mA,-120",
            "AccelerometerZ,mG,1000",
            "DropSensorRight,mm,0",
        ])
        self.assertEqual(status, AnalogSensorStatus(
            battery_voltage=14200.5, battery_current=-120.0, accelerometer_z=1000.0
        ))

    def test_missing_unit_column(self):
        aggregator, _ = make_aggregator(AnalogSensorAggregator, [])
        with self.assertRaises(FieldShapeError):
            aggregator.fold(["BatteryVoltage,14.2"])

    def test_collect(self):
        lines = [f"WallSensor,mm,{i}" for i in range(12)] + ["MagSensorLeft,VAL,3.5"]
        aggregator, _ = make_aggregator(
            AnalogSensorAggregator, ["getanalogsensors", "SensorName,Unit,Value"] + lines
        )
        status = aggregator.collect()
        self.assertEqual(status.wall_sensor, 11.0)
        self.assertEqual(status.mag_sensor_left, 3.5)


class DigitalSensorAggregatorTest(unittest.TestCase):
    def test_fold(self):
        aggregator, _ = make_aggregator(DigitalSensorAggregator, [])
        status = aggregator.fold(["SNSR_DUSTBIN_IS_IN,1", "LSIDEBIT,0", "RSIDEBIT,2"])
        self.assertEqual(status, DigitalSensorStatus(sensor_dustbin_is_in=True))

    def test_collect_with_spaced_header(self):
        lines = ["SNSR_DC_JACK_IS_IN,1"] + ["LFRONTBIT,0"] * 8
        aggregator, _ = make_aggregator(
            DigitalSensorAggregator, ["getdigitalsensors", "Digital Sensor Name, Value"] + lines
        )
        self.assertTrue(aggregator.collect().sensor_dc_jack_is_in)


class ChargerStatusAggregatorTest(unittest.TestCase):
    def test_mixed_int_and_float_fields(self):
        aggregator, _ = make_aggregator(ChargerStatusAggregator, [])
        status = aggregator.fold(["FuelPercent,87", "VBattV,12.4", "VExtV,0", "Charger_mAH,0"])
        self.assertEqual(status, ChargerStatus(fuel_percent=87, v_batt_v=12.4, v_ext_v=0.0))
        self.assertIsInstance(status.v_ext_v, float)

    def test_unknown_float_field_is_ignored(self):
        aggregator, _ = make_aggregator(ChargerStatusAggregator, [])
        with self.assertLogs(aggregator.logger, level="ERROR"):
            self.assertEqual(aggregator.fold(["Mystery,1.5"]), ChargerStatus())

    def test_unknown_field_failing_both_kinds(self):
        aggregator, _ = make_aggregator(ChargerStatusAggregator, [])
        with self.assertRaises(ParseFloatError) as ctx:
            aggregator.fold(["Mystery,abc"])
        self.assertIsInstance(ctx.exception.__cause__, ParseIntError)

    def test_float_in_integer_field_is_logged_and_ignored(self):
        aggregator, _ = make_aggregator(ChargerStatusAggregator, [])
        with self.assertLogs(aggregator.logger, level="ERROR"):
            status = aggregator.fold(["FuelPercent,87.0", "BattTempCAvg,24"])
        self.assertEqual(status, ChargerStatus(batt_temp_c_avg=24))

    def test_integer_field_failing_both_kinds(self):
        aggregator, _ = make_aggregator(ChargerStatusAggregator, [])
        with self.assertRaises(ParseFloatError) as ctx:
            aggregator.fold(["FuelPercent,lots"])
        self.assertIsInstance(ctx.exception.__cause__, ParseIntError)

    def test_bad_voltage_is_fatal(self):
        aggregator, _ = make_aggregator(ChargerStatusAggregator, [])
        with self.assertRaises(ParseFloatError):
            aggregator.fold(["VBattV,abc"])


if __name__ == "__main__":
    unittest.main()
