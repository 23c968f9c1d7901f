"""Journey logging to append-only text files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from sailnav.geometry import GpsPosition
from sailnav.records import GpsData
from sailnav.textio import append_line

log = logging.getLogger(__name__)


@dataclass
class LogEntry:
    """One competition log record."""

    entry_id: int = 0
    bearing: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    speed: float = 0.0
    timestamp: str = ""
    distance_from_waypoint: float = 0.0
    distance_from_destination: float = 0.0


class Logger:
    """Writes position records and journey events to a text file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = path
        self.entries = 0
        self.available = False
        self._latitude = 0.0
        self._longitude = 0.0
        self._timestamp = ""

    def log_data(self, packet: LogEntry) -> None:
        """Keep the position and time of ``packet`` for the next publish."""
        self._latitude = packet.latitude
        self._longitude = packet.longitude
        self._timestamp = packet.timestamp
        self.available = True

    def publish(self) -> bool:
        """Write the pending record, if any; return whether one was written."""
        if not self.available:
            log.info("no new log available")
            return False
        append_line(
            f"{self._timestamp} {self._latitude:.15g} {self._longitude:.15g}",
            self.path,
        )
        self.entries += 1
        self.available = False
        return True

    def publish_waypoint(self, origin: GpsData, target: GpsPosition, message: str) -> None:
        """Write a line describing a move from ``origin`` towards ``target``."""
        line = (
            f"{origin.timestamp} : {origin.latitude:.10g} {origin.longitude:.10g}"
            f" (->) {target.latitude:.10g} {target.longitude:.10g} : {message}"
        )
        append_line(line, self.path)
        self.entries += 1
        self.available = False

    def write(self, message: str) -> None:
        """Append ``message`` as a line of its own."""
        append_line(message, self.path)