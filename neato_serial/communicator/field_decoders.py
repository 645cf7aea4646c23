"""
field_decoders.py

Parses single CSV-like response lines into typed fields.

    Brush_RPM, 1200              -> IntField
    BatteryVoltage,V,14.2        -> UnitFloatField
    SNSR_DUSTBIN_IS_IN,1         -> BoolField
    VBattV,14.21                 -> SimpleFloatField

Only the value part is whitespace-trimmed; names and units are kept as sent.
"""

import re
from typing import List, Union

from neato_serial.errors import FieldShapeError, ParseFloatError, ParseIntError
from neato_serial.models import BoolField, IntField, SimpleFloatField, UnitFloatField
from neato_serial.param_types import FieldKind

Field = Union[IntField, UnitFloatField, BoolField, SimpleFloatField]

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

_INT_PATTERN = re.compile(r"[+-]?\d+")


def _split(line: str, minimum: int) -> List[str]:
    parts = line.split(",")
    if len(parts) < minimum:
        raise FieldShapeError(f"Expected at least {minimum} comma-separated parts in {line!r}", line)
    return parts


def parse_int(text: str, line: str = "") -> int:
    """
    Parses a trimmed decimal integer that fits in 32 signed bits.
    """
    text = text.strip()
    if not _INT_PATTERN.fullmatch(text):
        raise ParseIntError(f"Invalid integer {text!r}", line)
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ParseIntError(f"Integer {text!r} out of range", line)
    return value


def parse_float(text: str, line: str = "") -> float:
    """
    Parses a trimmed decimal floating-point number.
    """
    text = text.strip()
    # float() also accepts digit separators, which the robot never sends
    if "_" in text:
        raise ParseFloatError(f"Invalid float {text!r}", line)
    try:
        return float(text)
    except ValueError as e:
        raise ParseFloatError(f"Invalid float {text!r}", line) from e


def decode_int_field(line: str) -> IntField:
    parts = _split(line, 2)
    return IntField(name=parts[0], value=parse_int(parts[1], line))


def decode_unit_float_field(line: str) -> UnitFloatField:
    parts = _split(line, 3)
    return UnitFloatField(name=parts[0], unit=parts[1], value=parse_float(parts[2], line))


def decode_bool_field(line: str) -> BoolField:
    parts = _split(line, 2)
    return BoolField(name=parts[0], value=parse_int(parts[1], line) == 1)


def decode_simple_float_field(line: str) -> SimpleFloatField:
    parts = _split(line, 2)
    return SimpleFloatField(name=parts[0], value=parse_float(parts[1], line))


_DECODERS = {
    FieldKind.INT: decode_int_field,
    FieldKind.UNIT_FLOAT: decode_unit_float_field,
    FieldKind.BOOL: decode_bool_field,
    FieldKind.FLOAT: decode_simple_float_field,
}


def decode_field(line: str, kind: FieldKind) -> Field:
    """
    Decodes a line with the decoder for the given field kind.

    Args:
        line: The raw response line.
        kind: The expected field shape.

    Returns:
        The decoded field.

    Raises:
        FieldShapeError, ParseIntError or ParseFloatError.
    """
    return _DECODERS[kind](line)


def field_name(line: str) -> str:
    """
    Returns the name part of a field line without decoding its value.
    """
    return line.split(",", 1)[0]
