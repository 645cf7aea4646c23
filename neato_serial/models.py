"""
models.py

Defines core data models used throughout the driver: the decoded field shapes,
the four status records and the on/off toggle.
Utilizes dataclasses to enforce structure and type safety.
"""

from dataclasses import dataclass, fields
from enum import Enum


class Toggle(Enum):
    """
    Binary switch serialized as the literal strings "on"/"off".
    """
    ON = "on"
    OFF = "off"

    def __str__(self) -> str:
        return self.value


@dataclass
class IntField:
    """
    A "Name,123" line.
    """
    name: str
    value: int


@dataclass
class UnitFloatField:
    """
    A "Name,Unit,1.5" line.
    """
    name: str
    unit: str
    value: float


@dataclass
class BoolField:
    """
    A "Name,0|1" line.
    """
    name: str
    value: bool


@dataclass
class SimpleFloatField:
    """
    A "Name,12.4" line.
    """
    name: str
    value: float


class StatusRecord:
    """
    Mixin giving the status records a compact multi-line rendering.
    """

    def describe(self) -> str:
        rows = [f"  {f.name}: {getattr(self, f.name)}" for f in fields(self)]
        return f"{self.__class__.__name__}:\n" + "\n".join(rows)


@dataclass(frozen=True)
class MotorStatus(StatusRecord):
    """
    Snapshot of the `getmotors` response.
    """
    brush_rpm: int = 0
    brush_ma: int = 0
    vacuum_rpm: int = 0
    vacuum_ma: int = 0
    left_wheel_rpm: int = 0
    left_wheel_load: int = 0
    left_wheel_position_in_mm: int = 0
    left_wheel_speed: int = 0
    right_wheel_rpm: int = 0
    right_wheel_load: int = 0
    right_wheel_position_in_mm: int = 0
    right_wheel_speed: int = 0
    side_brush_ma: int = 0


@dataclass(frozen=True)
class AnalogSensorStatus(StatusRecord):
    """
    Snapshot of the `getanalogsensors` response. Units are dropped.
    """
    battery_voltage: float = 0.0
    battery_current: float = 0.0
    battery_temperature: float = 0.0
    external_voltage: float = 0.0
    accelerometer_x: float = 0.0
    accelerometer_y: float = 0.0
    accelerometer_z: float = 0.0
    vacuum_current: float = 0.0
    side_brush_current: float = 0.0
    mag_sensor_left: float = 0.0
    mag_sensor_right: float = 0.0
    wall_sensor: float = 0.0
    drop_sensor_left: float = 0.0
    drop_sensor_right: float = 0.0


@dataclass(frozen=True)
class DigitalSensorStatus(StatusRecord):
    """
    Snapshot of the `getdigitalsensors` response.
    """
    sensor_dc_jack_is_in: bool = False
    sensor_dustbin_is_in: bool = False
    sensor_left_wheel_extended: bool = False
    sensor_right_wheel_extended: bool = False
    left_sidebit: bool = False
    left_frontbit: bool = False
    left_ldsbit: bool = False
    right_sidebit: bool = False
    right_frontbit: bool = False
    right_ldsbit: bool = False


@dataclass(frozen=True)
class ChargerStatus(StatusRecord):
    """
    Snapshot of the `getcharger` response. Mixed integer and float fields.
    """
    fuel_percent: int = 0
    battery_over_temp: int = 0
    charging_active: int = 0
    charging_enabled: int = 0
    confident_on_fuel: int = 0
    on_reserved_fuel: int = 0
    empty_fuel: int = 0
    battery_failure: int = 0
    ext_pwr_present: int = 0
    thermistor_present: int = 0
    batt_temp_c_avg: int = 0
    v_batt_v: float = 0.0
    v_ext_v: float = 0.0
    charger_mah: int = 0
    discharge_mah: int = 0
