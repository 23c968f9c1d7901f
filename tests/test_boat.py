import pytest

from sailnav.boat import JOURNEY_BANNER, Navigator
from sailnav.control import ControlUnit, Tack
from sailnav.geometry import GpsPosition, distance
from sailnav.logger import Logger
from sailnav.maestro import Maestro, Servo
from sailnav.records import CompassData, GpsData
from sailnav.sensors import CompassModule, GpsModule, WindSensorModule
from sailnav.textio import read_lines

START = GpsPosition(60.10347832490164, 19.928544759750366)
DEST = GpsPosition(60.105879322635616, 19.926559925079346)


def make_control(tmp_path, checkpoints):
    dest = tmp_path / "destination.txt"
    dest.write_text(
        "# checkpoints\n"
        + "".join(f"{p.latitude},{p.longitude}\n" for p in checkpoints)
    )
    settings = tmp_path / "settings.txt"
    settings.write_text("10\n\n60\n\n4\n\n5\n")
    control = ControlUnit()
    control.load(dest, settings)
    return control


def gps_at(position, time_value=1000):
    return GpsData(
        valid=True,
        latitude=position.latitude,
        longitude=position.longitude,
        speed=1.5,
        time_value=time_value,
        timestamp="12:00:00",
    )


def make_navigator(tmp_path, control, position, bearing=0, wind=0):
    reading = gps_at(position)
    gps = GpsModule(lambda: reading)
    gps.reading = reading
    compass = CompassModule(lambda: CompassData(valid=True, bearing=bearing))
    compass.reading = CompassData(valid=True, bearing=bearing)
    wind_module = WindSensorModule(lambda: 2)
    wind_module.reading = wind
    rudder = Servo(-1, 1, 1, Maestro())
    sail = Servo(0, 1, 0, Maestro())
    return Navigator(
        control,
        gps,
        compass,
        wind_module,
        rudder,
        sail,
        Logger(tmp_path / "contest.txt"),
        Logger(tmp_path / "waypoint.txt"),
    )


def test_step_lays_waypoint_a_quarter_of_the_way(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, START)
    nav.step(0)
    assert control.waypoint_set is True
    assert control.tack is Tack.PORT
    expected = distance(START, DEST) / 4
    assert distance(START, control.waypoint) == pytest.approx(expected, rel=1e-6)
    text = (tmp_path / "waypoint.txt").read_text()
    assert "[NEW WAYPOINT SET]" in text


def test_step_returns_log_entry_and_feeds_data_logger(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, START)
    record = nav.step(7)
    assert record.entry_id == 7
    assert record.timestamp == "12:00:00"
    assert record.latitude == START.latitude
    assert record.longitude == START.longitude
    assert record.distance_from_destination == pytest.approx(distance(START, DEST))
    assert nav.data_logger.available is True
    assert nav.data_logger.publish() is True
    assert read_lines(tmp_path / "contest.txt")[0].startswith("12:00:00 ")


def test_sail_uses_fixed_wind_by_default(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, START, bearing=0, wind=180)
    nav.step(0)
    assert nav.sail.target == pytest.approx(0.75)
    assert nav.rudder.target in (-1.0, -0.5, 0.0, 0.5, 1.0)


def test_sail_follows_wind_sensor_when_override_cleared(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, START, bearing=0, wind=180)
    nav.wind_override = None
    nav.step(0)
    assert nav.sail.target == pytest.approx(0.0)


def test_time_limit_drops_waypoint(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, START)
    nav.step(0)
    assert control.waypoint_set is True

    nav.gps.reading = gps_at(START, time_value=1030)
    nav.step(1)
    assert control.waypoint_set is True

    nav.gps.reading = gps_at(START, time_value=1100)
    nav.step(2)
    assert control.waypoint_set is False
    assert "Too much time has passed" in (tmp_path / "waypoint.txt").read_text()


def test_last_checkpoint_ends_journey(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, DEST)
    nav.step(0)
    assert control.active is False
    assert control.checkpoints == []
    text = (tmp_path / "waypoint.txt").read_text()
    assert "[CHECKPOINT REACHED]" in text
    assert "[NEXT DESTINATION]" not in text


def test_checkpoint_moves_to_next_destination(tmp_path):
    control = make_control(tmp_path, [DEST, START])
    nav = make_navigator(tmp_path, control, DEST)
    nav.step(0)
    assert control.active is True
    assert control.destination == START
    assert control.waypoint_set is False
    assert "[NEXT DESTINATION]" in (tmp_path / "waypoint.txt").read_text()


def test_step_without_checkpoints_raises(tmp_path):
    nav = make_navigator(tmp_path, ControlUnit(), START)
    with pytest.raises(LookupError):
        nav.step(0)


def test_run_finishes_and_parks_servos(tmp_path):
    control = make_control(tmp_path, [DEST])
    nav = make_navigator(tmp_path, control, DEST)
    for name in ("wind_interval", "compass_interval", "gps_interval", "servo_interval"):
        setattr(nav, name, 0.01)
    nav.log_delay = 0.0
    nav.log_interval = 0.01
    nav.warmup = 0.0
    nav.step_interval = 0.0

    steps = nav.run()
    assert steps == 1
    assert control.active is False
    assert nav.sail.target == pytest.approx(0.1)
    assert nav.rudder.target == 0
    assert read_lines(tmp_path / "contest.txt")[0] == JOURNEY_BANNER
    assert read_lines(tmp_path / "waypoint.txt")[0] == JOURNEY_BANNER