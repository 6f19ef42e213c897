"""Workout-to-RPG stat engine: XP, levels, stats, HP and streaks."""

from stat_engine.engine import StatEngine
from stat_engine.exceptions import SerializationError, StatEngineError, ValidationError

__all__ = [
    "SerializationError",
    "StatEngine",
    "StatEngineError",
    "ValidationError",
]
