"""
scan_reader.py

Implements the ScanReader class which reads the response to `getldsscan`:

    AngleInDegrees,DistInMM,Intensity,ErrorCodeHEX
    0,221,1400,0
    1,223,1396,0
    ...
    359,220,1388,0
    ROTATION_SPEED,5.12

Distances are converted from millimetres to metres in arrival order.
"""

import logging
from typing import List, Optional

from neato_serial.communicator.field_decoders import parse_int
from neato_serial.communicator.line_framer import LineFramer

HEADER_PREFIXES = ("ROTATION", "Angle")


class ScanReader:
    """
    Collects one revolution of laser distance readings.
    """

    def __init__(self, framer: LineFramer, line_budget: int = 362,
                 logger: Optional[logging.Logger] = None):
        self.framer = framer
        self.line_budget = line_budget
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def read_ranges(self) -> List[float]:
        """
        Reads up to line_budget lines and returns the ranges in metres.

        Header and trailer lines are skipped, as are lines without a distance
        column. The ROTATION_SPEED trailer ends the scan early.

        Raises:
            ParseIntError: If a distance is not an integer; no ranges are returned.
            LinkError: If the link fails or goes silent at any point of the scan.
        """
        self.logger.debug("Reading serial_port for scan_ranges")
        ranges: List[float] = []
        for _ in range(self.line_budget):
            line = self.framer.read_line()
            self.logger.debug(line)

            if line.startswith(HEADER_PREFIXES):
                if ranges:
                    break
                continue

            parts = line.split(",")
            if len(parts) < 2:
                self.logger.warning(f"Could not get distance from {line!r}")
                continue
            ranges.append(parse_int(parts[1], line) / 1000.0)

        self.logger.debug(f"Got {len(ranges)} scan_ranges")
        return ranges
