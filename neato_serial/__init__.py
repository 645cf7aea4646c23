"""
__init__.py

Initializes the neato_serial package by exposing the status records, the
on/off toggle and the base error class callers work with.
"""

from neato_serial.errors import NeatoError
from neato_serial.models import (
    AnalogSensorStatus,
    ChargerStatus,
    DigitalSensorStatus,
    MotorStatus,
    Toggle,
)

__all__ = [
    'AnalogSensorStatus',
    'ChargerStatus',
    'DigitalSensorStatus',
    'MotorStatus',
    'NeatoError',
    'Toggle'
]
