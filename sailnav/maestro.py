"""Serial servo controller protocol and the servo driver built on it."""

from __future__ import annotations

import logging
import os
from enum import IntEnum
from types import TracebackType

import serial

from sailnav.geometry import convert_coordinates

log = logging.getLogger(__name__)

DEFAULT_PORT = "/dev/ttyACM0"
# Pulse limits in quarter microseconds (992 and 2000 in the controller's units).
LOWER_LIMIT = 3968
UPPER_LIMIT = 8000
DEFAULT_SPEED = 50
_SEVEN_BITS = 0x7F


class MaestroCommand(IntEnum):
    """Command bytes understood by the servo controller."""

    SET_POSITION = 0x84
    SET_SPEED = 0x87
    SET_ACCELERATION = 0x89
    GET_POSITION = 0x90
    GET_MOVING = 0x93
    GET_ERROR = 0xA1
    SET_HOME = 0xA2


def encode_command(channel: int, command: int, target: int) -> bytes:
    """Build the four-byte frame: command, channel, low 7 bits, next 7 bits."""
    return bytes(
        (
            int(command) & 0xFF,
            channel & 0xFF,
            target & _SEVEN_BITS,
            (target >> 7) & _SEVEN_BITS,
        )
    )


class Maestro:
    """Connection to a servo controller on a serial port."""

    def __init__(self, port: str | os.PathLike[str] = DEFAULT_PORT) -> None:
        self.port = os.fspath(port)
        self.lower_limit = LOWER_LIMIT
        self.upper_limit = UPPER_LIMIT
        self.connection: serial.SerialBase | None = None

    @property
    def is_open(self) -> bool:
        return self.connection is not None and self.connection.is_open

    def open(self) -> None:
        """Open the port in raw mode; raises ``serial.SerialException`` on failure."""
        if self.is_open:
            return
        self.connection = serial.serial_for_url(self.port, timeout=1)

    def command(self, channel: int, command: int, target: int) -> None:
        """Send one command frame to the controller."""
        if not self.is_open or self.connection is None:
            raise RuntimeError("servo controller is not open")
        self.connection.write(encode_command(channel, command, target))

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None

    def __enter__(self) -> Maestro:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class Servo:
    """One servo channel driven towards a target within ``[lower, upper]``."""

    def __init__(
        self, lower_limit: float, upper_limit: float, channel: int, controller: Maestro
    ) -> None:
        self.lower_boundary = lower_limit
        self.upper_boundary = upper_limit
        self.channel = channel
        self.controller = controller
        self.initialized = False
        self.target: float | None = None

    def init(self) -> bool:
        """Open the controller and set the channel speed; return whether it worked."""
        try:
            self.controller.open()
            self.controller.command(self.channel, MaestroCommand.SET_SPEED, DEFAULT_SPEED)
        except OSError as exc:
            log.error("servo on channel %d failed to initialize: %s", self.channel, exc)
            self.initialized = False
            return False
        self.initialized = True
        return True

    def run(self) -> int | None:
        """Send the current target; return the pulse sent, or None if not initialized."""
        if not self.initialized:
            log.warning("servo on channel %d not initialized", self.channel)
            return None
        if self.target is None:
            raise RuntimeError("no servo target has been set")
        position = int(
            convert_coordinates(
                self.upper_boundary,
                self.lower_boundary,
                self.controller.upper_limit,
                self.controller.lower_limit,
                self.target,
            )
        )
        self.controller.command(self.channel, MaestroCommand.SET_POSITION, position)
        return position

    def set_target(self, limit: float) -> None:
        if limit < self.upper_boundary or limit > self.lower_boundary:
            self.target = limit
        elif limit > self.upper_boundary:
            self.target = self.upper_boundary
        elif limit < self.lower_boundary:
            self.target = self.lower_boundary