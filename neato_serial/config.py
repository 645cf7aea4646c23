import logging

import serial

# Stores parameters for each supported robot model: serial settings, framing
# budget, settle time and synchronization bounds.
# A bound of None keeps the unbounded polling the robot firmware expects.
ROBOT_PARAMETERS = {
    "DSeries": {
        "baudrate": 115200,
        "bytesize": serial.EIGHTBITS,
        "parity": serial.PARITY_NONE,
        "stopbits": serial.STOPBITS_ONE,
        "timeout": 1.0,
        "write_timeout": 1.0,
        "max_line_bytes": 99,
        "strict_line_length": False,
        "encoding": "utf-8",
        "settle_delay": 5.0,           # LDS turret spin-up, seconds
        "scan_line_budget": 362,       # header + 360 readings + trailer
        "max_sync_lines": None,
        "max_handshake_lines": None,
    }
}

DEFAULT_ROBOT = "DSeries"

# A global list of typical baud rates
BAUD_RATES = [9600, 19200, 38400, 57600, 115200]


def setup_logging(name: str, level: int = logging.DEBUG) -> logging.Logger:
    """
    Configures logging for the application.
    The level can be raised to INFO to hide the per-line protocol chatter.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)

    # Removes old handlers if any
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.addHandler(console_handler)

    return logger
