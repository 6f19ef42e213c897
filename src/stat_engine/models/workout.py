"""Workout record — one logged training session, as supplied by the caller."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from stat_engine.exceptions import ValidationError
from stat_engine.models.enums import WorkoutType

MIN_INTENSITY = 1
MAX_INTENSITY = 5


def _check_optional_amount(name: str, value: float | None) -> None:
    """Optional measurements must be finite and non-negative when present."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}", field=name)
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} must be finite and >= 0, got {value!r}", field=name)


@dataclass(frozen=True)
class Workout:
    """Immutable workout as logged manually or imported from a health source.

    Only ``workout_type``, ``duration_minutes``, ``intensity`` and
    ``created_at`` are required. Every other measurement is optional and
    falls back to an estimate during scoring.
    """

    workout_type: WorkoutType
    duration_minutes: int
    intensity: int  # 1 (easy) - 5 (all-out)
    created_at: datetime
    energy_burned_kcal: float | None = None
    distance_meters: float | None = None
    average_heart_rate_bpm: float | None = None
    estimated_heart_rate_bpm: float | None = None
    strength_reps: int | None = None
    strength_weight_kg: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.workout_type, WorkoutType):
            raise ValidationError(
                f"workout_type must be a WorkoutType, got {self.workout_type!r}",
                field="workout_type",
            )
        if isinstance(self.duration_minutes, bool) or not isinstance(self.duration_minutes, int):
            raise ValidationError(
                f"duration_minutes must be an int, got {self.duration_minutes!r}",
                field="duration_minutes",
            )
        # Zero is tolerated (scored as one minute); negative is a caller bug
        if self.duration_minutes < 0:
            raise ValidationError(
                f"duration_minutes must be >= 0, got {self.duration_minutes}",
                field="duration_minutes",
            )
        if isinstance(self.intensity, bool) or not isinstance(self.intensity, int):
            raise ValidationError(
                f"intensity must be an int, got {self.intensity!r}", field="intensity"
            )
        if not MIN_INTENSITY <= self.intensity <= MAX_INTENSITY:
            raise ValidationError(
                f"intensity must be in [{MIN_INTENSITY}, {MAX_INTENSITY}], got {self.intensity}",
                field="intensity",
            )
        if not isinstance(self.created_at, datetime):
            raise ValidationError(
                f"created_at must be a datetime, got {self.created_at!r}", field="created_at"
            )
        _check_optional_amount("energy_burned_kcal", self.energy_burned_kcal)
        _check_optional_amount("distance_meters", self.distance_meters)
        _check_optional_amount("average_heart_rate_bpm", self.average_heart_rate_bpm)
        _check_optional_amount("estimated_heart_rate_bpm", self.estimated_heart_rate_bpm)
        if self.strength_reps is not None and (
            isinstance(self.strength_reps, bool) or not isinstance(self.strength_reps, int)
        ):
            raise ValidationError(
                f"strength_reps must be an int, got {self.strength_reps!r}", field="strength_reps"
            )
        _check_optional_amount("strength_reps", self.strength_reps)
        _check_optional_amount("strength_weight_kg", self.strength_weight_kg)

    @property
    def is_timezone_aware(self) -> bool:
        return self.created_at.tzinfo is not None and self.created_at.utcoffset() is not None
