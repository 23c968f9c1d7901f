# sailnav

Navigation and control logic for a small autonomous sailing boat.

The package works out where the boat should go next and how its rudder and
sail should be set to get there:

- great-circle distances and bearings between GPS positions
  (`sailnav.geometry`),
- an angle of approach that keeps the boat off the wind, tacking alternately
  to port and starboard,
- intermediate waypoints a fraction of the way towards the next checkpoint,
- rudder and sail settings derived from the compass and wind bearings,
- a journey of checkpoints read from a plain-text file, with distance and
  time thresholds read from a settings file (`sailnav.control`),
- log files for the competition track and for waypoint events
  (`sailnav.logger`),
- the command protocol of a serial servo controller and a servo driver built
  on it (`sailnav.maestro`), and modules that keep the latest compass, GPS
  and wind readings (`sailnav.sensors`),
- the on-board navigation loop (`sailnav.boat`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Simulating a journey

```
sailnav-sim
```

runs the tacking simulation. Starting from a position, with a fixed wind
bearing, it lays out waypoint after waypoint towards the destination until
the boat is within the goal threshold, then prints `GOAL REACHED`, the number
of recorded positions, and every position as `latitude,longitude`.

Options:

- `--start LAT LON` and `--destination LAT LON`: the end points,
- `--wind`: wind bearing in degrees (default 337),
- `--threshold`: goal threshold in metres (default 10),
- `--factor`: distance factor (default 4).

A threshold or factor that is not positive is rejected.

The same simulation is available from Python:

```python
from sailnav.geometry import GpsPosition
from sailnav.simulation import simulate

start = GpsPosition(latitude=60.10347832490164, longitude=19.928544759750366)
goal = GpsPosition(latitude=60.105879322635616, longitude=19.926559925079346)

track = simulate(start, goal, 337.0, 10.0, 4.0)
for point in track:
    print(point.latitude, point.longitude)
```

Each leg covers `1 / distance_factor` of the remaining distance. The returned
list begins with the start and ends with the destination.

## Geometry

All angles are compass degrees (0 is north, growing clockwise) and all
distances are kilometres on a sphere of radius 6371 km.

```python
from sailnav.geometry import (
    GpsPosition, angle_of_approach, coordinates_to_degrees, distance,
    normalize, waypoint,
)

here = GpsPosition(latitude=60.1034, longitude=19.9285)
there = GpsPosition(latitude=60.1058, longitude=19.9265)

bearing = coordinates_to_degrees(here.latitude, here.longitude,
                                 there.latitude, there.longitude)
offset = angle_of_approach(bearing, 337.0)     # between 5 and 45 degrees
heading = normalize(bearing + offset)
step = waypoint(here, distance(here, there) / 4, heading)
```

`flip_degrees` mirrors an angle to the other side of north, and
`convert_coordinates` maps a value linearly from one range onto another.

`rudder_position` and `sail_position` take a `Vec2` built with
`degrees_to_vector` from an offset bearing (rotated by 90 degrees so that
straight ahead points along +y). The rudder comes back as -1, -0.5, 0, 0.5
or 1; the sail as a value between 0 and 0.75.

## Readings

`sailnav.records` holds `GpsData` (one fix, with `position()` giving a
`GpsPosition`) and `CompassData`. `CompassData.get` and `CompassData.set`
accept the `CompassField` members for calibration, bearing in degrees, pitch
and roll, and raise `KeyError` for any other field.
`decode_compass_registers` turns the 31 compass register values
(`CompassRegister`) into a `CompassData`; a calibration value of -1 gives an
invalid reading.

`sailnav.sensors.decode_ma3_response` extracts the 10-bit wind vane value
from a three-byte ADC response. `CompassModule`, `GpsModule` and
`WindSensorModule` each take a reader callable; `run()` polls it once and
keeps the result (the compass bearing and the wind bearing corrected by a
calibration offset, the wind value scaled from 2–1020 onto 0–359), and
`report()` prints and returns a summary of a reading not reported before.

## Servos

`sailnav.maestro.encode_command` builds the four-byte controller frame
(command, channel, low 7 bits, next 7 bits of the target). `Maestro` opens a
serial port (default `/dev/ttyACM0`) with pyserial and sends such frames; it
can be used as a context manager. `Servo` maps a target in its own
`[lower, upper]` range onto the controller's pulse range; `init()` opens the
controller and sets the channel speed, `run()` sends the current target.

## Files

Checkpoints are listed one per line as `latitude,longitude`. Lines that
start with `#` are comments:

```
# first buoy
60.105879322635616,19.926559925079346
```

A line that is not two comma-separated values makes `ControlUnit.load`
raise `ValueError`.

The settings file holds, on lines 1, 3, 5 and 7 once comments are removed
(the lines in between are left empty):

1. the distance in metres at which a checkpoint or waypoint counts as reached,
2. the time in seconds allowed to reach a waypoint before a new one is made,
3. the distance factor,
4. the shortest distance in metres a new waypoint may be placed at.

If the settings file is missing or has fewer than two lines, the defaults are
zero thresholds and a distance factor of 1; a file with two to six lines is
rejected with `ValueError`.

The sensor configuration holds the compass offset on its first line and the
wind sensor offset on its third, again counting after comments are removed;
`sailnav.sensors.load_sensor_offsets` reads it.

`Logger.publish` appends `timestamp latitude longitude` for the last record
given to `log_data`; `Logger.publish_waypoint` appends
`timestamp : lat lon (->) lat lon : message`; `Logger.write` appends a line
as given.

## Running on the boat

`sailnav.boat.Navigator` ties a `ControlUnit`, the GPS, compass and wind
modules, the rudder and sail `Servo`s and two `Logger`s together. Each call
to `step` uses the latest sensor readings, lays a new waypoint when none is
set, updates the servo targets, checks whether the waypoint or checkpoint was
reached or the waypoint timed out, and hands a `LogEntry` to the data logger.
`run` starts background polling of the sensors, servos and data logger,
repeats `step` until the control unit is no longer active (after the last
checkpoint is reached), and returns the number of steps.

By default `Navigator.wind_override` is 0, so steering uses a fixed wind
bearing of 0; set it to `None` to steer by the wind module's reading.

## What the package does not do

It does not talk to the sensor hardware itself: there is no GPS daemon
client, no I2C compass reader and no SPI wind vane reader. The sensor modules
take reader callables, and supplying them is up to the caller. There is no
command that starts the boat; a `Navigator` has to be built and run from
Python.