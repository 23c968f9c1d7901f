"""Polling modules for the compass, the GPS receiver and the wind vane."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence

from sailnav.control import _atof
from sailnav.geometry import convert_coordinates, normalize
from sailnav.records import CompassData, CompassField, GpsData
from sailnav.textio import read_lines, remove_comments

log = logging.getLogger(__name__)

DEFAULT_SENSOR_CONFIG = "Settings/sensor_config.txt"
# Request frame for the wind vane's ADC: start bit, single-ended channel 0.
MA3_REQUEST = bytes((0x01, 0x80, 0x00))
_MA3_LOW = 2
_MA3_HIGH = 1020


def load_sensor_offsets(
    path: str | os.PathLike[str] = DEFAULT_SENSOR_CONFIG,
) -> tuple[float, float]:
    """Return the (compass, wind sensor) calibration offsets from a config file.

    The compass offset is the first non-comment line and the wind offset the
    third; raises ``ValueError`` if the file has fewer lines than that.
    """
    lines = remove_comments(read_lines(path))
    if len(lines) < 3:
        raise ValueError(f"sensor config {os.fspath(path)!r} has too few entries")
    return _atof(lines[0]), _atof(lines[2])


def decode_ma3_response(buffer: Sequence[int]) -> int:
    """Extract the 10-bit reading from a three-byte ADC response."""
    if len(buffer) < 3:
        raise ValueError(f"expected 3 response bytes, got {len(buffer)}")
    return ((buffer[1] & 3) << 8) + buffer[2]


class CompassModule:
    """Keeps the latest valid compass reading, corrected by a fixed offset."""

    def __init__(self, reader: Callable[[], CompassData], offset: float = 0.0) -> None:
        self.reader = reader
        self.offset = offset
        self.reading = CompassData()
        self.new_data_available = False

    def run(self) -> bool:
        """Poll once; return whether a valid reading was stored."""
        data = self.reader()
        if not data.valid:
            log.warning("compass connection error: check cabling")
            return False
        bearing = data.get(CompassField.COMPASS_BEARING_DEGREES_16)
        data.set(CompassField.COMPASS_BEARING_DEGREES_16, int(normalize(bearing + self.offset)))
        self.reading = data
        self.new_data_available = True
        return True

    def report(self) -> str | None:
        """Print and return a summary of a reading not reported before."""
        if not self.new_data_available:
            return None
        text = "\n".join(
            (
                "- - COMPASS SENSOR - -",
                f"Bearing: {self.reading.get(CompassField.COMPASS_BEARING_DEGREES_16)}",
                f"Pitch  : {self.reading.get(CompassField.PITCH_ANGLE_8)}",
                f"Roll   : {self.reading.get(CompassField.ROLL_ANGLE_8)}",
                "----------------------",
            )
        )
        print(text)
        self.new_data_available = False
        return text


class GpsModule:
    """Keeps the latest valid GPS fix."""

    def __init__(self, reader: Callable[[], GpsData]) -> None:
        self.reader = reader
        self.reading = GpsData()
        self.new_data_available = False

    def run(self) -> bool:
        """Poll once; return whether a valid fix was stored."""
        data = self.reader()
        if not data.valid:
            log.warning("GPS: data reading not valid")
            return False
        self.reading = data
        self.new_data_available = True
        return True

    def report(self) -> str | None:
        """Print and return a summary of a fix not reported before."""
        if not self.new_data_available:
            return None
        text = "\n".join(
            (
                "- - GPS SENSOR - -",
                f"GPS LAT : {self.reading.latitude:g}",
                f"GPS LON : {self.reading.longitude:g}",
                f"GPS TIME: {self.reading.timestamp}",
                f"GPS TIME: {self.reading.time_value}",
                "------------------",
            )
        )
        print(text)
        self.new_data_available = False
        return text


class WindSensorModule:
    """Turns raw wind vane readings into a bearing in degrees."""

    def __init__(self, reader: Callable[[], int], offset: float = 0.0) -> None:
        self.reader = reader
        self.offset = offset
        self.reading = 0
        self.new_data_available = False

    def run(self) -> int:
        """Poll once and return the corrected wind bearing."""
        raw = self.reader()
        uncorrected = int(convert_coordinates(_MA3_LOW, _MA3_HIGH, 0, 359, raw))
        self.reading = int(normalize(uncorrected + self.offset))
        self.new_data_available = True
        return self.reading

    def report(self) -> str | None:
        """Print and return the bearing if it has not been reported before."""
        if not self.new_data_available:
            return None
        text = "\n".join(
            ("- - WIND SENSOR - -", f"Wind Bearing: {self.reading}", "-------------------")
        )
        print(text)
        self.new_data_available = False
        return text