"""
protocol_factory.py

Provides a factory function to instantiate the appropriate robot class for a
robot model, configured from ROBOT_PARAMETERS. This abstraction decouples
model-specific settings from the entry point and the tests.
"""

import logging
from typing import Any, Dict, Optional

from neato_serial.config import ROBOT_PARAMETERS
from neato_serial.robots.protocols.dseries_protocol import DSeries
from neato_serial.robots.protocols.robot_protocol import NeatoRobot

ROBOT_CLASS_MAP = {
    "DSeries": DSeries,
}

# Parameters consumed by the robot constructor; the rest are serial settings.
_ROBOT_ARGS = (
    "max_line_bytes",
    "strict_line_length",
    "encoding",
    "settle_delay",
    "scan_line_budget",
    "max_sync_lines",
    "max_handshake_lines",
)


def get_robot_parameters(robot_type: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Returns a copy of the configured parameters for a robot model.

    Args:
        robot_type: The robot model (e.g., "DSeries").
        overrides: Values replacing the configured ones.

    Raises:
        ValueError: If the robot model or an override key is unknown.
    """
    if robot_type not in ROBOT_PARAMETERS:
        raise ValueError(f"Unsupported robot type: {robot_type}")
    params = dict(ROBOT_PARAMETERS[robot_type])
    for key, value in (overrides or {}).items():
        if key not in params:
            raise ValueError(f"Unknown parameter for {robot_type}: {key}")
        params[key] = value
    return params


def get_robot(robot_type: str, link: Any, overrides: Optional[Dict[str, Any]] = None,
              logger: Optional[logging.Logger] = None, **kwargs) -> NeatoRobot:
    """
    Returns an instance of the robot class for the given model, bound to a link.

    Args:
        robot_type: A string naming the robot model (e.g., "DSeries").
        link: The open byte stream to the robot.
        overrides: Parameter values replacing ROBOT_PARAMETERS entries.
        logger: Optional logger handed to the robot and its components.
        kwargs: Extra constructor arguments (e.g., sleep).

    Raises:
        ValueError: If the robot model is unsupported.
    """
    if robot_type not in ROBOT_CLASS_MAP:
        raise ValueError(f"Unsupported robot type: {robot_type}")
    params = get_robot_parameters(robot_type, overrides)
    robot_args = {key: params[key] for key in _ROBOT_ARGS if key in params}
    return ROBOT_CLASS_MAP[robot_type](link, logger=logger, **robot_args, **kwargs)
