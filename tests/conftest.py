"""Shared test fixtures: a fixed clock, workout factories and sample histories."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import pytest

from stat_engine.engine import StatEngine
from stat_engine.models.enums import WorkoutType
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.workout import Workout

# Sunday noon; every "days_ago" offset lands at noon on a distinct calendar day
NOW = datetime(2026, 3, 15, 12, 0)


def make_workout(
    workout_type: WorkoutType = WorkoutType.STRENGTH,
    duration_minutes: int = 45,
    intensity: int = 3,
    days_ago: float = 0,
    now: datetime = NOW,
    **kwargs,
) -> Workout:
    """Build a workout ``days_ago`` days before *now*."""
    created_at = kwargs.pop("created_at", now - timedelta(days=days_ago))
    return Workout(
        workout_type=workout_type,
        duration_minutes=duration_minutes,
        intensity=intensity,
        created_at=created_at,
        **kwargs,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def workout_factory() -> Callable[..., Workout]:
    return make_workout


@pytest.fixture
def engine() -> StatEngine:
    return StatEngine(clock=lambda: NOW)


@pytest.fixture
def scenario_a_workout() -> Workout:
    """45 min strength session at intensity 4 with no measurements."""
    return make_workout(WorkoutType.STRENGTH, duration_minutes=45, intensity=4)


@pytest.fixture
def mixed_history() -> list[Workout]:
    """Three weeks of varied training, roughly every other day."""
    plan = [
        (WorkoutType.RUNNING, 40, 3, 0),
        (WorkoutType.STRENGTH, 50, 4, 1),
        (WorkoutType.YOGA, 30, 1, 2),
        (WorkoutType.CYCLING, 75, 4, 4),
        (WorkoutType.HIIT, 25, 5, 6),
        (WorkoutType.WALKING, 60, 2, 7),
        (WorkoutType.SWIMMING, 35, 3, 9),
        (WorkoutType.STRENGTH, 55, 3, 11),
        (WorkoutType.MEDITATION, 15, 1, 13),
        (WorkoutType.RUNNING, 60, 4, 15),
        (WorkoutType.OTHER, 45, 2, 18),
        (WorkoutType.STRETCHING, 20, 1, 20),
    ]
    return [
        make_workout(workout_type, duration, intensity, days_ago)
        for workout_type, duration, intensity, days_ago in plan
    ]


@pytest.fixture
def well_rested() -> RecoveryMetrics:
    """Every recovery signal at or beyond its full-score target."""
    return RecoveryMetrics(
        sleep_minutes_7d=480.0,
        mindful_minutes_7d=30.0,
        hrv_sdnn_ms=100.0,
        resting_heart_rate_bpm=45.0,
        heart_rate_recovery_1min_bpm=45.0,
    )


@pytest.fixture
def poorly_rested() -> RecoveryMetrics:
    """Only a sleep reading, far from the 8 h target."""
    return RecoveryMetrics(sleep_minutes_7d=240.0)
