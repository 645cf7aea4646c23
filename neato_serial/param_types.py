"""
param_types.py

Defines field kinds, command shapes and the data classes describing commands
and status fields. This file standardizes how robot commands and the lines of
their responses are described across the package.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class FieldKind(Enum):
    """
    Enumeration of the value shapes a response line can carry.
    """
    INT = "int"                  # Name,123
    UNIT_FLOAT = "unit_float"    # Name,Unit,1.5
    BOOL = "bool"                # Name,0|1
    FLOAT = "float"              # Name,12.4


class CommandShape(Enum):
    """
    Enumeration of the read-back behaviour a command requires.
    """
    ECHO = "echo"                # write, read one echo line (best effort)
    QUERY = "query"              # write, echo, flush, then a header and data block
    HANDSHAKE = "handshake"      # write, poll until the keyword is echoed
    SETTLE = "settle"            # write, echo, flush, then wait for actuation


@dataclass(frozen=True)
class FieldDefinition:
    """
    Data class mapping one wire field name onto a status record attribute.

    Attributes:
        name: The field name as sent by the robot (e.g., "Brush_RPM").
        attribute: The status record attribute it is stored in.
        kind: The shape used to decode the line.
    """
    name: str
    attribute: str
    kind: FieldKind


@dataclass(frozen=True)
class CommandDefinition:
    """
    Data class representing a robot command.

    Attributes:
        keyword: The command word written to the link (e.g., "getmotors").
        description: A human-readable description of what the command does.
        shape: How the response to the command is consumed.
        header: The column header preceding the data block (query commands only).
        line_count: Number of data lines following the header (query commands only).
        confirm: Substring that confirms a handshake command.
    """
    keyword: str
    description: str
    shape: CommandShape
    header: Optional[str] = None
    line_count: int = 0
    confirm: Optional[str] = None
