"""Journey state: checkpoints, the current waypoint, thresholds and tacking side."""

from __future__ import annotations

import logging
import os
import re
from collections import deque
from collections.abc import Sequence
from enum import IntEnum

from sailnav.geometry import GpsPosition
from sailnav.textio import read_lines, remove_comments, split_string

log = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_COMPONENTS = (
    "Servo Rudder",
    "Servo Sail",
    "Module GPS",
    "Module Compass",
    "Module Wind Sensor",
)


def _atof(text: str) -> float:
    """Parse the leading number of ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


class Tack(IntEnum):
    """Side to which the next waypoint is laid out."""

    PORT = 0
    STARBOARD = 1


class ControlUnit:
    """Holds the checkpoints to visit and decides when a new waypoint is due."""

    def __init__(self) -> None:
        self.active = False
        self.waypoint_set = False
        self.destination_set = False
        self.waypoint = GpsPosition()
        self.distance_threshold = 0.0
        self.time_threshold = 0.0
        self.distance_factor = 0.0
        self.time_value = 0
        self.calculated_threshold = 0.0
        self.waypoint_creation_threshold = 0.0
        self.tack = Tack.STARBOARD
        self._destinations: deque[GpsPosition] = deque()

    @property
    def destination(self) -> GpsPosition:
        """The checkpoint currently sailed towards."""
        if not self._destinations:
            raise LookupError("no checkpoints remaining")
        return self._destinations[0]

    @property
    def checkpoints(self) -> list[GpsPosition]:
        """The remaining checkpoints, next first."""
        return list(self._destinations)

    def load(self, destination: str | os.PathLike[str], settings: str | os.PathLike[str]) -> None:
        """Read checkpoints and thresholds from their files and activate the unit.

        Raises ``ValueError`` for a checkpoint line that is not ``lat,lon`` and
        for a settings file with some but too few entries.
        """
        lines = remove_comments(read_lines(destination))
        log.info("%d checkpoints to travel to", len(lines))
        for line in lines:
            parts = split_string(line, ",")
            if len(parts) != 2:
                self.active = False
                raise ValueError(f"coordinate error in line {line!r}")
            self._destinations.append(GpsPosition(_atof(parts[0]), _atof(parts[1])))
        self.destination_set = True

        try:
            values = remove_comments(read_lines(settings))
        except OSError:
            values = []
        if len(values) < 2:
            log.warning("settings file corrupt or missing: using default values")
            self.distance_threshold = 0.0
            self.time_threshold = 0.0
            self.distance_factor = 1.0
            self.waypoint_creation_threshold = 0.0
            self.calculated_threshold = self.distance_threshold / self.distance_factor
        else:
            if len(values) < 7:
                raise ValueError(f"settings file has too few entries: {len(values)}")
            self.distance_threshold = _atof(values[0])
            self.time_threshold = _atof(values[2])
            self.distance_factor = _atof(values[4])
            self.waypoint_creation_threshold = _atof(values[6]) / 1000
            self.calculated_threshold = self.distance_threshold / 1000

        log.info(
            "distance %s m, time %s s, factor %s, creation threshold %s km",
            self.distance_threshold,
            self.time_threshold,
            self.distance_factor,
            self.waypoint_creation_threshold,
        )
        self.active = True

    def validate_inits(self, statuses: Sequence[bool]) -> bool:
        """Report the start-up state of each component.

        Failures are logged but do not stop the journey, so this returns True.
        """
        if len(statuses) < len(_COMPONENTS):
            raise ValueError(f"expected {len(_COMPONENTS)} statuses, got {len(statuses)}")
        for name, ok in zip(_COMPONENTS, statuses):
            if ok:
                log.info("[ OK ] : %s", name)
            else:
                log.error("[ ERROR ] : %s", name)
        return True

    def set_waypoint(self, waypoint: GpsPosition) -> None:
        self.waypoint = GpsPosition(waypoint.latitude, waypoint.longitude)
        self.waypoint_set = True

    def alternate_tack(self) -> None:
        self.tack = Tack.PORT if self.tack is Tack.STARBOARD else Tack.STARBOARD

    def update_journey(self) -> None:
        """Move on to the next checkpoint and drop the current waypoint."""
        if self._destinations:
            self._destinations.popleft()
            self.waypoint_set = False
            self.waypoint = GpsPosition()
        else:
            log.info("journey complete")

    def start_timer(self, value: float) -> None:
        """Remember the time at which the current waypoint was set."""
        self.time_value = int(value)

    def time_discrepancy_reached(self, time_value: float) -> bool:
        """Whether the time allowed for reaching the waypoint has run out."""
        if int(time_value) - self.time_value >= self.time_threshold:
            log.info("time limit reached")
            return True
        return False