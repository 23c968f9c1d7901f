"""Sensor reading records for the GPS receiver and the compass."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from sailnav.geometry import GpsPosition


@dataclass
class GpsData:
    """One GPS fix."""

    valid: bool = False
    latitude: float = 0.0
    longitude: float = 0.0
    speed: float = 0.0
    time_value: int = 0
    timestamp: str = ""

    def position(self) -> GpsPosition:
        return GpsPosition(self.latitude, self.longitude)


class CompassRegister(IntEnum):
    """I2C register map of the compass."""

    COMMAND_REGISTER_SOFTWARE_READ_8 = 0x00
    COMPASS_BEARING_8 = 0x01
    COMPASS_BEARING_16_HIGH_BYTE = 0x02
    COMPASS_BEARING_16_LOW_BYTE = 0x03
    PITCH_ANGLE_8 = 0x04
    ROLL_ANGLE_8 = 0x05
    MAGNETOMETER_X_RAW_16_HIGH_BYTE = 0x06
    MAGNETOMETER_X_RAW_16_LOW_BYTE = 0x07
    MAGNETOMETER_Y_RAW_16_HIGH_BYTE = 0x08
    MAGNETOMETER_Y_RAW_16_LOW_BYTE = 0x09
    MAGNETOMETER_Z_RAW_16_HIGH_BYTE = 0x0A
    MAGNETOMETER_Z_RAW_16_LOW_BYTE = 0x0B
    ACCELEROMETER_X_RAW_16_HIGH_BYTE = 0x0C
    ACCELEROMETER_X_RAW_16_LOW_BYTE = 0x0D
    ACCELEROMETER_Y_RAW_16_HIGH_BYTE = 0x0E
    ACCELEROMETER_Y_RAW_16_LOW_BYTE = 0x0F
    ACCELEROMETER_Z_RAW_16_HIGH_BYTE = 0x10
    ACCELEROMETER_Z_RAW_16_LOW_BYTE = 0x11
    GYRO_X_RAW_16_HIGH_BYTE = 0x12
    GYRO_X_RAW_16_LOW_BYTE = 0x13
    GYRO_Y_RAW_16_HIGH_BYTE = 0x14
    GYRO_Y_RAW_16_LOW_BYTE = 0x15
    GYRO_Z_RAW_16_HIGH_BYTE = 0x16
    GYRO_Z_RAW_16_LOW_BYTE = 0x17
    COMPASS_TEMPERATURE_16_HIGH_BYTE = 0x18
    COMPASS_TEMPERATURE_16_LOW_BYTE = 0x19
    COMPASS_BEARING_16_HIGH_BYTE_DEGREES = 0x1A
    COMPASS_BEARING_16_LOW_BYTE_DEGREES = 0x1B
    PITCH_ANGLE_16_HIGH_BYTE = 0x1C
    PITCH_ANGLE_16_LOW_BYTE = 0x1D
    CALIBRATION_STATE_8 = 0x1E


TOTAL_REGISTRY_ENTRIES = len(CompassRegister)


class CompassField(IntEnum):
    """Decoded compass quantities."""

    COMMAND_REGISTER_SOFTWARE_READ_8 = 0x00
    COMPASS_BEARING_8 = 0x01
    COMPASS_BEARING_16 = 0x02
    PITCH_ANGLE_8 = 0x03
    ROLL_ANGLE_8 = 0x04
    MAGNETOMETER_X_RAW_16 = 0x05
    MAGNETOMETER_Y_RAW_16 = 0x06
    MAGNETOMETER_Z_RAW_16 = 0x07
    ACCELEROMETER_X_RAW_16 = 0x08
    ACCELEROMETER_Y_RAW_16 = 0x09
    ACCELEROMETER_Z_RAW_16 = 0x0A
    GYRO_X_RAW_16 = 0x0B
    GYRO_Y_RAW_16 = 0x0C
    GYRO_Z_RAW_16 = 0x0D
    COMPASS_TEMPERATURE_16 = 0x0E
    COMPASS_BEARING_DEGREES_16 = 0x0F
    PITCH_ANGLE_16 = 0x10
    CALIBRATION_STATE_8 = 0x11


_FIELD_ATTRIBUTES = {
    CompassField.CALIBRATION_STATE_8: "calibration",
    CompassField.COMPASS_BEARING_DEGREES_16: "bearing",
    CompassField.PITCH_ANGLE_8: "pitch",
    CompassField.ROLL_ANGLE_8: "roll",
}


def _attribute_for(field: int) -> str:
    try:
        return _FIELD_ATTRIBUTES[CompassField(field)]
    except (ValueError, KeyError):
        raise KeyError(f"compass field {field!r} is not supported") from None


@dataclass
class CompassData:
    """One compass reading; only calibration, bearing, pitch and roll are kept."""

    valid: bool = False
    calibration: int = 0
    bearing: int = 0
    pitch: int = 0
    roll: int = 0

    def get(self, field: int) -> int:
        """Value of a supported field; raises KeyError for any other."""
        return getattr(self, _attribute_for(field))

    def set(self, field: int, value: int) -> None:
        """Store a supported field; raises KeyError for any other."""
        setattr(self, _attribute_for(field), value)


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def decode_compass_registers(raw: Sequence[int]) -> CompassData:
    """Build a reading from the full block of compass register values."""
    if len(raw) < TOTAL_REGISTRY_ENTRIES:
        raise ValueError(
            f"expected {TOTAL_REGISTRY_ENTRIES} register values, got {len(raw)}"
        )
    calibration = raw[CompassRegister.CALIBRATION_STATE_8]
    if calibration == -1:
        return CompassData(valid=False)
    combined = (raw[CompassRegister.COMPASS_BEARING_16_HIGH_BYTE_DEGREES] << 8) | raw[
        CompassRegister.COMPASS_BEARING_16_LOW_BYTE_DEGREES
    ]
    return CompassData(
        valid=True,
        calibration=calibration,
        bearing=_trunc_div(combined, 16),
        pitch=raw[CompassRegister.PITCH_ANGLE_8],
        roll=raw[CompassRegister.ROLL_ANGLE_8],
    )