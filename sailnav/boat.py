"""The on-board navigation loop: waypoint planning and servo steering."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from sailnav.control import ControlUnit, Tack
from sailnav.geometry import (
    GpsPosition,
    angle_of_approach,
    coordinates_to_degrees,
    degrees_to_vector,
    distance,
    flip_degrees,
    normalize,
    rudder_position,
    sail_position,
)
from sailnav.geometry import waypoint as project_waypoint
from sailnav.logger import LogEntry, Logger
from sailnav.maestro import Servo
from sailnav.records import CompassField, GpsData
from sailnav.sensors import CompassModule, GpsModule, WindSensorModule

log = logging.getLogger(__name__)

# Rotates bearings so that straight ahead maps onto the vector (0, 1).
HEADING_OFFSET = 90
JOURNEY_BANNER = " - - - BEGINNING NEW JOURNEY - - - "
SAIL_DEFAULT = 0.5
SAIL_FINISHED = 0.1
RUDDER_CENTRE = 0.0


class Navigator:
    """Ties sensors, servos and the control unit together into a journey."""

    wind_interval = 0.2
    compass_interval = 0.1
    gps_interval = 1.2
    servo_interval = 0.01
    log_delay = 6.0
    log_interval = 1.5
    warmup = 5.2
    step_interval = 0.5

    def __init__(
        self,
        control: ControlUnit,
        gps: GpsModule,
        compass: CompassModule,
        wind: WindSensorModule,
        rudder: Servo,
        sail: Servo,
        data_logger: Logger,
        debug_logger: Logger,
    ) -> None:
        self.control = control
        self.gps = gps
        self.compass = compass
        self.wind = wind
        self.rudder = rudder
        self.sail = sail
        self.data_logger = data_logger
        self.debug_logger = debug_logger
        # The wind vane is not trusted for steering; a fixed bearing is used
        # instead. Set to None to steer by the wind sensor's reading.
        self.wind_override: int | None = 0

    def _wind_bearing(self) -> int:
        if self.wind_override is not None:
            return self.wind_override
        return self.wind.reading

    def _lay_waypoint(self, reading: GpsData, wind_bearing: float) -> GpsPosition:
        control = self.control
        current = reading.position()
        destination = control.destination
        destination_bearing = coordinates_to_degrees(
            current.latitude, current.longitude, destination.latitude, destination.longitude
        )

        aoa = 0.0
        if control.tack is Tack.STARBOARD:
            aoa = angle_of_approach(destination_bearing, wind_bearing)
            control.alternate_tack()
        elif control.tack is Tack.PORT:
            aoa = flip_degrees(angle_of_approach(destination_bearing, wind_bearing))
            control.alternate_tack()

        heading = normalize(aoa + destination_bearing)
        destination_distance = distance(current, destination)
        leg = destination_distance / control.distance_factor
        if leg < control.waypoint_creation_threshold:
            log.debug("threshold reached, limiting waypoint distance")
            leg = control.waypoint_creation_threshold

        new_waypoint = project_waypoint(current, leg, heading)
        log.info(
            "new waypoint %s,%s (heading %s, %s m)",
            new_waypoint.latitude,
            new_waypoint.longitude,
            heading,
            leg * 1000,
        )
        control.set_waypoint(new_waypoint)
        control.start_timer(reading.time_value)
        self.debug_logger.publish_waypoint(reading, new_waypoint, "[NEW WAYPOINT SET]")
        return new_waypoint

    def step(self, entry: int) -> LogEntry:
        """Run one navigation iteration on the latest readings and log it."""
        control = self.control
        reading = self.gps.reading
        compass_reading = self.compass.reading
        wind_bearing = self._wind_bearing()

        if not control.waypoint_set:
            self._lay_waypoint(reading, wind_bearing)

        compass_bearing = compass_reading.get(CompassField.COMPASS_BEARING_DEGREES_16)
        current = reading.position()
        target = control.waypoint
        waypoint_bearing = coordinates_to_degrees(
            current.latitude, current.longitude, target.latitude, target.longitude
        )

        waypoint_offset = int(waypoint_bearing - compass_bearing)
        wind_offset = int(compass_bearing - wind_bearing)
        rudder_vector = degrees_to_vector(waypoint_offset + HEADING_OFFSET)
        sail_vector = degrees_to_vector(wind_offset + HEADING_OFFSET)
        rudder_setting = rudder_position(rudder_vector)
        sail_setting = sail_position(sail_vector)
        log.debug("rudder %s, sail %s", rudder_setting, sail_setting)
        self.rudder.set_target(rudder_setting)
        self.sail.set_target(sail_setting)

        waypoint_distance = distance(current, target)
        goal_threshold = control.calculated_threshold
        if waypoint_distance < goal_threshold:
            log.info("waypoint reached")
            control.waypoint_set = False
            self.debug_logger.publish_waypoint(
                reading, GpsPosition(), "[REACHED WAYPOINT, GRAB NEW ONE!]"
            )

        checkpoint = control.destination
        checkpoint_distance = distance(current, checkpoint)
        if checkpoint_distance < goal_threshold:
            log.info("checkpoint reached")
            self.debug_logger.publish_waypoint(reading, GpsPosition(), "[CHECKPOINT REACHED]")
            control.update_journey()
            if control.checkpoints:
                self.debug_logger.publish_waypoint(
                    reading, control.destination, "[NEXT DESTINATION]"
                )
            else:
                log.info("journey complete")
                control.active = False
        elif control.time_discrepancy_reached(reading.time_value):
            self.debug_logger.publish_waypoint(
                reading, GpsPosition(), "[Too much time has passed to reach waypoint]"
            )
            control.waypoint_set = False

        record = LogEntry(
            entry_id=entry,
            bearing=compass_bearing,
            latitude=reading.latitude,
            longitude=reading.longitude,
            speed=reading.speed,
            timestamp=reading.timestamp,
            distance_from_waypoint=waypoint_distance,
            distance_from_destination=checkpoint_distance,
        )
        self.data_logger.log_data(record)
        return record

    @staticmethod
    def _poll(
        action: Callable[[], object],
        interval: float,
        stop: threading.Event,
        delay: float = 0.0,
    ) -> None:
        if stop.wait(delay):
            return
        while not stop.is_set():
            try:
                action()
            except Exception:
                log.exception("polling %r failed", action)
            if stop.wait(interval):
                return

    def run(self) -> int:
        """Sail until the control unit deactivates; return the number of steps."""
        self.sail.set_target(SAIL_DEFAULT)
        self.rudder.set_target(RUDDER_CENTRE)

        stop = threading.Event()
        jobs: list[tuple[Callable[[], object], float, float]] = [
            (self.wind.run, self.wind_interval, 0.0),
            (self.compass.run, self.compass_interval, 0.0),
            (self.gps.run, self.gps_interval, 0.0),
            (self.rudder.run, self.servo_interval, 0.0),
            (self.sail.run, self.servo_interval, 0.0),
            (self.data_logger.publish, self.log_interval, self.log_delay),
        ]
        threads = [
            threading.Thread(
                target=self._poll, args=(action, interval, stop, delay), daemon=True
            )
            for action, interval, delay in jobs
        ]
        for thread in threads:
            thread.start()

        entry = 0
        try:
            time.sleep(self.warmup)
            self.data_logger.write(JOURNEY_BANNER)
            self.debug_logger.write(JOURNEY_BANNER)
            while self.control.active:
                time.sleep(self.step_interval)
                log.debug("index #%d", entry)
                self.step(entry)
                entry += 1
        finally:
            stop.set()
            for thread in threads:
                thread.join()

        self.sail.set_target(SAIL_FINISHED)
        self.rudder.set_target(RUDDER_CENTRE)
        log.info("journey done")
        return entry