"""Navigation, tacking, logging and servo control for an autonomous sailing boat."""

__version__ = "0.1.0"

__all__ = [
    "boat",
    "control",
    "geometry",
    "logger",
    "maestro",
    "records",
    "sensors",
    "simulation",
    "textio",
]