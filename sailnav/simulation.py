"""Offline simulation of a tacking journey towards a destination."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from sailnav.geometry import (
    GpsPosition,
    angle_of_approach,
    coordinates_to_degrees,
    distance,
    flip_degrees,
    normalize,
    waypoint,
)

_DEFAULT_START = (60.10347832490164, 19.928544759750366)
_DEFAULT_DESTINATION = (60.105879322635616, 19.926559925079346)


def simulate(
    start: GpsPosition,
    destination: GpsPosition,
    wind_bearing: float,
    goal_threshold: float,
    distance_factor: float,
) -> list[GpsPosition]:
    """Lay out waypoints from ``start`` until within ``goal_threshold`` metres.

    Each leg covers ``1 / distance_factor`` of the remaining distance, tacking
    alternately to each side. The result starts with ``start`` and ends with
    ``destination``.
    """
    if distance_factor <= 0:
        raise ValueError("distance_factor must be positive")
    if goal_threshold <= 0:
        raise ValueError("goal_threshold must be positive")
    threshold_km = goal_threshold / 1000

    current = GpsPosition(start.latitude, start.longitude)
    route = [GpsPosition(start.latitude, start.longitude)]
    starboard = True
    while True:
        bearing = coordinates_to_degrees(
            current.latitude, current.longitude, destination.latitude, destination.longitude
        )
        aoa = angle_of_approach(bearing, wind_bearing)
        if not starboard:
            aoa = flip_degrees(aoa)
        starboard = not starboard

        heading = normalize(aoa + bearing)
        remaining = distance(current, destination)
        current = waypoint(current, remaining / distance_factor, heading)
        route.append(current)
        if remaining <= threshold_km:
            break
    route.append(GpsPosition(destination.latitude, destination.longitude))
    return route


def main(argv: Sequence[str] | None = None) -> int:
    """Run a simulation and print the waypoints as ``lat,lon`` lines."""
    parser = argparse.ArgumentParser(description="Simulate a tacking route.")
    parser.add_argument("--start", nargs=2, type=float, metavar=("LAT", "LON"),
                        default=list(_DEFAULT_START))
    parser.add_argument("--destination", nargs=2, type=float, metavar=("LAT", "LON"),
                        default=list(_DEFAULT_DESTINATION))
    parser.add_argument("--wind", type=float, default=337.0, help="wind bearing in degrees")
    parser.add_argument("--threshold", type=float, default=10.0, help="goal threshold in metres")
    parser.add_argument("--factor", type=float, default=4.0, help="distance factor")
    args = parser.parse_args(argv)

    try:
        route = simulate(
            GpsPosition(*args.start),
            GpsPosition(*args.destination),
            args.wind,
            args.threshold,
            args.factor,
        )
    except ValueError as exc:
        parser.error(str(exc))

    print("GOAL REACHED")
    print(f"Waypoints Recorded: {len(route)}")
    for point in route:
        print(f"{point.latitude:.20g},{point.longitude:.20g}")
    return 0