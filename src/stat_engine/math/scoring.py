"""Per-workout XP scoring.

A workout is valued by one of four formulas depending on its XP category:

    ENDURANCE:  energy_kcal × 1.0
    SPEED:      minutes × (mph / 7.5) × 10
    STRENGTH:   minutes × (hr / 140) × (rpe / 10) × 14
    RECOVERY:   minutes × 4

Missing measurements fall back to estimates (energy from intensity, distance
from a per-type pace, heart rate from the estimated reading or 130 bpm), so
every workout scores without ever raising on absent data.
"""

from __future__ import annotations

from stat_engine.models.enums import (
    DEFAULT_HEART_RATE_BPM,
    ENDURANCE_XP_PER_KCAL,
    ENERGY_BASE_KCAL_PER_MIN,
    ENERGY_KCAL_PER_MIN_PER_INTENSITY,
    ESTIMATED_METERS_PER_MIN,
    METERS_PER_MILE,
    MIN_SCORED_MINUTES,
    RECOVERY_XP_PER_MIN,
    RPE_MAX,
    RPE_MIN,
    RPE_PER_INTENSITY,
    SPEED_CATEGORY_MIN_INTENSITY,
    SPEED_REFERENCE_MPH,
    SPEED_XP_PER_MIN,
    STRENGTH_REFERENCE_HR_BPM,
    STRENGTH_XP_PER_MIN,
    WorkoutType,
    XPCategory,
)
from stat_engine.models.workout import Workout

_CARDIO_TYPES = frozenset({
    WorkoutType.RUNNING,
    WorkoutType.CYCLING,
    WorkoutType.SWIMMING,
})

# Fixed category per type; cardio types are split by intensity in xp_category()
_FIXED_CATEGORY: dict[WorkoutType, XPCategory] = {
    WorkoutType.STRENGTH: XPCategory.STRENGTH,
    WorkoutType.HIIT: XPCategory.STRENGTH,
    WorkoutType.YOGA: XPCategory.RECOVERY,
    WorkoutType.STRETCHING: XPCategory.RECOVERY,
    WorkoutType.MEDITATION: XPCategory.RECOVERY,
    WorkoutType.WALKING: XPCategory.RECOVERY,
    WorkoutType.OTHER: XPCategory.ENDURANCE,
}


def scored_minutes(workout: Workout) -> float:
    """Duration used by every formula, floored at one minute."""
    return max(float(workout.duration_minutes), MIN_SCORED_MINUTES)


def estimate_energy_kcal(workout: Workout) -> float:
    """Estimate energy burned from intensity: 6.5-16.5 kcal/min for intensity 1-5."""
    base_rate = ENERGY_BASE_KCAL_PER_MIN + workout.intensity * ENERGY_KCAL_PER_MIN_PER_INTENSITY
    return base_rate * scored_minutes(workout)


def estimate_distance_meters(workout: Workout) -> float:
    """Estimate distance from a typical pace for the workout type (0 if not a travel sport)."""
    return scored_minutes(workout) * ESTIMATED_METERS_PER_MIN.get(workout.workout_type, 0.0)


def resolve_energy_kcal(workout: Workout) -> float:
    if workout.energy_burned_kcal is not None:
        return float(workout.energy_burned_kcal)
    return estimate_energy_kcal(workout)


def resolve_distance_meters(workout: Workout) -> float:
    if workout.distance_meters is not None:
        return float(workout.distance_meters)
    return estimate_distance_meters(workout)


def resolve_heart_rate_bpm(workout: Workout) -> float:
    """Measured average HR, else the estimated HR, else 130 bpm."""
    if workout.average_heart_rate_bpm is not None:
        return float(workout.average_heart_rate_bpm)
    if workout.estimated_heart_rate_bpm is not None:
        return float(workout.estimated_heart_rate_bpm)
    return DEFAULT_HEART_RATE_BPM


def miles_per_hour(distance_meters: float, minutes: float) -> float:
    if minutes <= 0:
        return 0.0
    miles = distance_meters / METERS_PER_MILE
    hours = minutes / 60.0
    return miles / hours


def perceived_exertion(intensity: int) -> float:
    """Map 1-5 intensity onto a 1-10 RPE scale."""
    return min(max(intensity * RPE_PER_INTENSITY, RPE_MIN), RPE_MAX)


def xp_category(workout: Workout) -> XPCategory:
    """Classify a workout; hard cardio (intensity >= 4) is valued for speed."""
    if workout.workout_type in _CARDIO_TYPES:
        if workout.intensity >= SPEED_CATEGORY_MIN_INTENSITY:
            return XPCategory.SPEED
        return XPCategory.ENDURANCE
    return _FIXED_CATEGORY[workout.workout_type]


def workout_score(workout: Workout) -> float:
    """XP earned by a single workout (always >= 0).

    Args:
        workout: The workout to score. Optional measurements are resolved
            through the documented fallbacks.

    Returns:
        The workout's XP contribution before any class, streak or bonus
        adjustment.
    """
    minutes = scored_minutes(workout)
    category = xp_category(workout)

    if category == XPCategory.ENDURANCE:
        score = resolve_energy_kcal(workout) * ENDURANCE_XP_PER_KCAL
    elif category == XPCategory.SPEED:
        mph = miles_per_hour(resolve_distance_meters(workout), minutes)
        score = minutes * (mph / SPEED_REFERENCE_MPH) * SPEED_XP_PER_MIN
    elif category == XPCategory.STRENGTH:
        hr = resolve_heart_rate_bpm(workout)
        rpe = perceived_exertion(workout.intensity)
        score = minutes * (hr / STRENGTH_REFERENCE_HR_BPM) * (rpe / RPE_MAX) * STRENGTH_XP_PER_MIN
    else:
        score = minutes * RECOVERY_XP_PER_MIN

    return max(0.0, score)


def xp_for_workout(workout: Workout) -> float:
    """Public name for workout_score(), used when awarding XP for a logged workout."""
    return workout_score(workout)
