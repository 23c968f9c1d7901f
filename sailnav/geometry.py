"""Vector, bearing and great-circle helpers used for navigation."""

from __future__ import annotations

import logging
import math
import struct
from dataclasses import dataclass

log = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
_EPSILON = 1e-14
_RUDDER_DEAD_ZONE = 0.225
_UPPER_ANGLE_DISCREPANCY = 45.0
_LOWER_ANGLE_DISCREPANCY = 5.0


@dataclass
class Vec2:
    """A two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)


@dataclass
class GpsPosition:
    """A latitude/longitude pair in degrees."""

    latitude: float = 0.0
    longitude: float = 0.0


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def degrees_to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def radians_to_degrees(radians: float) -> float:
    return radians * (180 / math.pi)


def convert_coordinates(
    from_low: float, from_high: float, to_low: float, to_high: float, position: float
) -> float:
    """Map ``position`` linearly from one range onto another."""
    percentile = (position - from_low) / (from_high - from_low)
    return percentile * (to_high - to_low) + to_low


def degrees_to_vector(value: float) -> Vec2:
    """Unit vector for an angle; x is inverted so right is positive."""
    radians = degrees_to_radians(value)
    x = -math.cos(radians)
    y = math.sin(radians)
    if abs(x) < _EPSILON:
        x = 0.0
    if abs(y) < _EPSILON:
        y = 0.0
    return Vec2(x, y)


def coordinates_to_degrees(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compass bearing from the first point to the second, in (0, 360]."""
    dy = lat2 - lat1
    dx = math.cos(math.pi / 180 * lat1) * (lon2 - lon1)
    angle = _f32(math.atan2(_f32(dy), _f32(dx)))
    degrees = radians_to_degrees(angle) - 90
    while degrees < 0:
        degrees += 360
    return abs(degrees - 360)


def flip_degrees(degrees: float) -> float:
    """Mirror an angle to the other side of north."""
    if degrees == 0:
        return 0.0
    return abs(degrees - 360)


def normalize(degrees: float) -> float:
    """Bring an angle into the range [0, 360]."""
    result = degrees
    while result > 360:
        result -= 360
    while result < 0:
        result += 360
    return result


def rudder_position(vector: Vec2) -> float:
    """Rudder setting in [-1, 1] for a heading vector where (0, 1) is straight ahead."""
    if vector.y <= 0:
        return 1.0 if vector.x >= 0 else -1.0
    if _RUDDER_DEAD_ZONE - abs(vector.x) >= 0:
        return 0.0
    return 0.5 if vector.x >= 0 else -0.5


def sail_position(vector: Vec2) -> float:
    """Sail setting in [0, 0.75] from the wind vector's forward component."""
    sail = convert_coordinates(-1, 1, 0, 0.75, vector.y)
    log.debug("sails at %s percent", convert_coordinates(-1, 1, 0, 1, vector.y) * 100)
    return sail


def angle_of_approach(destination_bearing: float, wind_bearing: float) -> float:
    """Recommended tacking angle, clamped between 5 and 45 degrees."""
    offset = abs(destination_bearing - wind_bearing)
    if offset > 180:
        offset = abs(offset - 360)
    offset /= 2
    offset = max(offset, _LOWER_ANGLE_DISCREPANCY)
    offset = min(offset, _UPPER_ANGLE_DISCREPANCY)
    return offset


def waypoint(current: GpsPosition, distance: float, direction: float) -> GpsPosition:
    """Point ``distance`` kilometres from ``current`` along bearing ``direction``."""
    lat = degrees_to_radians(current.latitude)
    angle = degrees_to_radians(direction)
    d = distance / EARTH_RADIUS_KM
    c = math.asin(math.sin(lat) * math.cos(d) + math.cos(lat) * math.sin(d) * math.cos(angle))
    c2 = math.atan2(
        math.sin(angle) * math.sin(d) * math.cos(lat),
        math.cos(d) - math.sin(lat) * math.sin(c),
    )
    return GpsPosition(radians_to_degrees(c), current.longitude + radians_to_degrees(c2))


def distance(point_a: GpsPosition, point_b: GpsPosition) -> float:
    """Haversine distance between two points, in kilometres."""
    d_lat = degrees_to_radians(point_b.latitude - point_a.latitude)
    d_lon = degrees_to_radians(point_b.longitude - point_a.longitude)
    factor = (
        math.sin(d_lat / 2) ** 2
        + math.cos(degrees_to_radians(point_a.latitude))
        * math.cos(degrees_to_radians(point_b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    return 2 * math.atan2(math.sqrt(factor), math.sqrt(1 - factor)) * EARTH_RADIUS_KM