import math

import pytest

from sailnav.geometry import (
    GpsPosition,
    Vec2,
    angle_of_approach,
    convert_coordinates,
    coordinates_to_degrees,
    degrees_to_radians,
    degrees_to_vector,
    distance,
    flip_degrees,
    normalize,
    radians_to_degrees,
    rudder_position,
    sail_position,
    waypoint,
)

ORIGIN = (60.10347832490164, 19.928544759750366)
NORTH = (60.10416745166214, 19.928647670465693)
EAST = (60.103515315640564, 19.93024519376206)
SOUTH = (60.10302680666239, 19.92855754798086)
WEST = (60.10354365796281, 19.927384886330515)


def test_vec2_subtraction_identities():
    v = Vec2(3.5, -2.0)
    assert v - Vec2() == v
    assert v - v == Vec2()


def test_degrees_radians_round_trip():
    for value in (0.0, 45.0, 123.4, 359.0):
        assert radians_to_degrees(degrees_to_radians(value)) == pytest.approx(value)
    assert degrees_to_radians(180) == pytest.approx(math.pi)


def test_convert_coordinates_endpoints():
    assert convert_coordinates(-1, 1, 0, 0.75, -1) == 0
    assert convert_coordinates(-1, 1, 0, 0.75, 1) == 0.75
    assert convert_coordinates(2, 1020, 0, 359, 2) == 0


def test_degrees_to_vector_clears_tiny_components():
    assert degrees_to_vector(90) == Vec2(0.0, 1.0)
    assert degrees_to_vector(0) == Vec2(-1.0, 0.0)


def test_degrees_to_vector_is_unit_length():
    for angle in range(0, 360, 17):
        v = degrees_to_vector(angle)
        assert math.hypot(v.x, v.y) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "target, low, high",
    [(EAST, 45, 135), (SOUTH, 135, 225), (WEST, 225, 315)],
)
def test_coordinates_to_degrees_quadrants(target, low, high):
    bearing = coordinates_to_degrees(*ORIGIN, *target)
    assert low < bearing < high


def test_coordinates_to_degrees_north():
    bearing = coordinates_to_degrees(*ORIGIN, *NORTH)
    assert bearing < 45 or bearing > 315


def test_coordinates_to_degrees_range():
    for target in (NORTH, EAST, SOUTH, WEST):
        bearing = coordinates_to_degrees(*ORIGIN, *target)
        assert 0 < bearing <= 360


def test_flip_degrees():
    assert flip_degrees(0) == 0
    for angle in range(1, 360, 7):
        assert flip_degrees(flip_degrees(angle)) == angle
        assert flip_degrees(angle) + angle == 360


def test_normalize():
    for angle in (0, 15.5, 180, 359.9, 360):
        assert normalize(angle) == angle
        assert normalize(angle + 720) == pytest.approx(angle)
        assert normalize(angle - 720) == pytest.approx(angle)


@pytest.mark.parametrize(
    "vector, expected",
    [
        (Vec2(0.3, -0.5), 1.0),
        (Vec2(0.0, 0.0), 1.0),
        (Vec2(-0.3, -0.5), -1.0),
        (Vec2(0.1, 0.9), 0.0),
        (Vec2(-0.225, 0.9), 0.0),
        (Vec2(0.5, 0.8), 0.5),
        (Vec2(-0.5, 0.8), -0.5),
    ],
)
def test_rudder_position(vector, expected):
    assert rudder_position(vector) == expected


def test_sail_position_bounds_and_monotonic():
    assert sail_position(Vec2(0, -1)) == 0
    assert sail_position(Vec2(0, 1)) == 0.75
    values = [sail_position(Vec2(0, y / 10)) for y in range(-10, 11)]
    assert values == sorted(values)


def test_angle_of_approach_clamps():
    assert angle_of_approach(100, 100) == 5.0
    assert angle_of_approach(0, 180) == 45.0
    for d in range(0, 360, 13):
        for w in range(0, 360, 29):
            assert 5.0 <= angle_of_approach(d, w) <= 45.0


def test_angle_of_approach_symmetric_and_wraps():
    assert angle_of_approach(30, 80) == angle_of_approach(80, 30)
    assert angle_of_approach(350, 10) == angle_of_approach(10, 30)


def test_distance_basic_properties():
    a = GpsPosition(*ORIGIN)
    b = GpsPosition(*EAST)
    assert distance(a, a) == 0
    assert distance(a, b) == pytest.approx(distance(b, a))
    assert distance(a, b) > 0


def test_waypoint_round_trip_distance():
    start = GpsPosition(*ORIGIN)
    for direction in (0, 45, 90, 200, 300):
        target = waypoint(start, 0.2, direction)
        assert distance(start, target) == pytest.approx(0.2, rel=1e-6)


def test_waypoint_zero_distance_is_same_point():
    start = GpsPosition(*ORIGIN)
    target = waypoint(start, 0.0, 123)
    assert target.latitude == pytest.approx(start.latitude)
    assert target.longitude == pytest.approx(start.longitude)


def test_waypoint_bearing_matches_direction():
    start = GpsPosition(*ORIGIN)
    target = waypoint(start, 0.5, 90)
    bearing = coordinates_to_degrees(start.latitude, start.longitude, target.latitude, target.longitude)
    assert bearing == pytest.approx(90, abs=1)