"""Stat aggregation: 30 days of workout scores → four 0-99 stat channels.

Each recent workout's score is split across strength / speed / endurance /
intelligence by a per-type weight table, scaled by the character class
modifier, and summed. Intelligence additionally collects consistency,
variety and recovery bonuses. Each channel is then compressed with

    stat = min(99, ln(1 + points) / ln(1 + 1000) × 99)

so early progress is fast and the cap is approached asymptotically.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

import numpy as np

from stat_engine.math.scoring import workout_score
from stat_engine.math.streak import calendar_day
from stat_engine.models.character_class import DEFAULT_CLASS_WEIGHTS, ClassWeights
from stat_engine.models.enums import (
    CLASS_MODIFIER_BASE,
    CLASS_MODIFIER_SCALE,
    CONSISTENCY_LOW_BONUS,
    CONSISTENCY_MID_BONUS,
    CONSISTENCY_POINTS_PER_DAY,
    CONSISTENCY_TOP_BONUS,
    CONSISTENCY_WEEKS,
    HRR_FLOOR_BPM,
    HRR_RANGE_BPM,
    HRV_FLOOR_MS,
    HRV_RANGE_MS,
    MINDFUL_TARGET_MINUTES,
    RECOVERY_BONUS_WEIGHTS,
    RESTING_HR_CEILING_BPM,
    RESTING_HR_RANGE_BPM,
    SLEEP_TARGET_HOURS,
    SLEEP_TOLERANCE_HOURS,
    STAT_CAP,
    STAT_NORMALIZATION_POINTS,
    STAT_WINDOW_DAYS,
    VARIETY_FULL_TYPE_COUNT,
    VARIETY_MAX_BONUS,
    WorkoutType,
)
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.user_stats import StatPoints
from stat_engine.models.workout import Workout

StatWeights = tuple[float, float, float, float]  # (str, spd, end, int)

_STAT_WEIGHTS: dict[WorkoutType, StatWeights] = {
    WorkoutType.STRENGTH: (0.70, 0.10, 0.20, 0.00),
    WorkoutType.RUNNING: (0.10, 0.50, 0.40, 0.00),
    WorkoutType.CYCLING: (0.05, 0.40, 0.55, 0.00),
    WorkoutType.HIIT: (0.40, 0.40, 0.20, 0.00),
    WorkoutType.SWIMMING: (0.10, 0.30, 0.60, 0.00),
    WorkoutType.YOGA: (0.00, 0.00, 0.10, 0.90),
    WorkoutType.STRETCHING: (0.00, 0.00, 0.10, 0.90),
    WorkoutType.MEDITATION: (0.00, 0.00, 0.10, 0.90),
    WorkoutType.OTHER: (0.20, 0.30, 0.50, 0.00),
}

# Easy walks count mostly as active recovery; brisk walks as endurance
_EASY_WALK_WEIGHTS: StatWeights = (0.00, 0.10, 0.40, 0.50)
_BRISK_WALK_WEIGHTS: StatWeights = (0.05, 0.20, 0.60, 0.15)
_EASY_WALK_MAX_INTENSITY = 2

_INTELLIGENCE = 3  # index of the intelligence channel in every 4-vector


def recent_workouts(
    workouts: Iterable[Workout], now: datetime, days: int
) -> list[Workout]:
    """Workouts created on or after ``now - days``."""
    cutoff = now - timedelta(days=days)
    return [w for w in workouts if w.created_at >= cutoff]


def stat_weights(workout_type: WorkoutType, intensity: int) -> StatWeights:
    """Share of a workout's score credited to each stat channel."""
    if workout_type == WorkoutType.WALKING:
        if intensity <= _EASY_WALK_MAX_INTENSITY:
            return _EASY_WALK_WEIGHTS
        return _BRISK_WALK_WEIGHTS
    return _STAT_WEIGHTS[workout_type]


def class_modifiers(class_weights: ClassWeights) -> np.ndarray:
    """Per-channel multiplier ``0.85 + weight × 0.6`` (0.85 for a zero weight)."""
    weights = np.array(class_weights.as_tuple(), dtype=np.float64)
    return CLASS_MODIFIER_BASE + weights * CLASS_MODIFIER_SCALE


def normalize(points: float) -> float:
    """Compress raw stat points onto the 0-99 scale with a log curve."""
    if points <= 0:
        return 0.0
    scale = math.log1p(STAT_NORMALIZATION_POINTS)
    return min(STAT_CAP, (math.log1p(points) / scale) * STAT_CAP)


def consistency_bonus(workouts: Iterable[Workout], now: datetime) -> float:
    """Intelligence bonus for training on a steady number of days per week.

    Looks at the four trailing 7-day blocks ending at ``now`` (block 0 is the
    current week), counts distinct workout days per block and averages them.
    Bands are checked in order and the first match wins; the 4-6 band sits
    inside the 3-7 band on purpose, so 4-6 days always earns the top bonus.
    """
    days_per_week: list[set] = [set() for _ in range(CONSISTENCY_WEEKS)]
    for workout in workouts:
        age = now - workout.created_at
        if age < timedelta(0):
            continue
        week = age // timedelta(weeks=1)
        if week < CONSISTENCY_WEEKS:
            days_per_week[week].add(calendar_day(workout.created_at, now))

    avg_days = sum(len(days) for days in days_per_week) / CONSISTENCY_WEEKS

    if 4.0 <= avg_days <= 6.0:
        return CONSISTENCY_TOP_BONUS
    if 3.0 <= avg_days < 7.0:
        return CONSISTENCY_MID_BONUS
    if avg_days >= 2.0:
        return CONSISTENCY_LOW_BONUS
    return avg_days * CONSISTENCY_POINTS_PER_DAY


def variety_bonus(workouts: Iterable[Workout]) -> float:
    """Intelligence bonus for training across many workout types (full at 6)."""
    distinct_types = {w.workout_type for w in workouts}
    return min(len(distinct_types) / VARIETY_FULL_TYPE_COUNT, 1.0) * VARIETY_MAX_BONUS


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def sleep_score(sleep_minutes: float) -> float:
    """1.0 at 8 h of sleep, falling linearly to 0 at 3.5 h either side."""
    delta = abs(sleep_minutes / 60.0 - SLEEP_TARGET_HOURS)
    return max(0.0, 1.0 - min(delta / SLEEP_TOLERANCE_HOURS, 1.0))


def mindful_score(mindful_minutes: float) -> float:
    return min(mindful_minutes / MINDFUL_TARGET_MINUTES, 1.0)


def hrv_score(hrv_sdnn_ms: float) -> float:
    return _clamp01((hrv_sdnn_ms - HRV_FLOOR_MS) / HRV_RANGE_MS)


def resting_hr_score(resting_hr_bpm: float) -> float:
    return _clamp01((RESTING_HR_CEILING_BPM - resting_hr_bpm) / RESTING_HR_RANGE_BPM)


def hrr_score(hrr_bpm: float) -> float:
    return _clamp01((hrr_bpm - HRR_FLOOR_BPM) / HRR_RANGE_BPM)


def recovery_bonus_points(recovery: RecoveryMetrics | None) -> float:
    """Weighted intelligence points for good recovery signals (0-120).

    Absent signals contribute nothing. HP uses a separately averaged score,
    see ``stat_engine.math.health.recovery_score_normalized``.
    """
    if recovery is None:
        return 0.0

    points = 0.0
    if recovery.sleep_minutes_7d is not None:
        points += sleep_score(recovery.sleep_minutes_7d) * RECOVERY_BONUS_WEIGHTS["sleep"]
    if recovery.mindful_minutes_7d is not None:
        points += mindful_score(recovery.mindful_minutes_7d) * RECOVERY_BONUS_WEIGHTS["mindful"]
    if recovery.hrv_sdnn_ms is not None:
        points += hrv_score(recovery.hrv_sdnn_ms) * RECOVERY_BONUS_WEIGHTS["hrv"]
    if recovery.resting_heart_rate_bpm is not None:
        points += resting_hr_score(recovery.resting_heart_rate_bpm) * RECOVERY_BONUS_WEIGHTS["resting_hr"]
    if recovery.heart_rate_recovery_1min_bpm is not None:
        points += hrr_score(recovery.heart_rate_recovery_1min_bpm) * RECOVERY_BONUS_WEIGHTS["hrr"]
    return points


def _processing_order(workouts: Sequence[Workout]) -> list[Workout]:
    # Fixed order so the float sums do not depend on how the caller sorted
    return sorted(
        workouts,
        key=lambda w: (
            w.created_at,
            w.workout_type.value,
            w.duration_minutes,
            w.intensity,
        ),
    )


def calculate_stat_points(
    workouts: Iterable[Workout],
    now: datetime,
    recovery: RecoveryMetrics | None = None,
    class_weights: ClassWeights | None = None,
) -> StatPoints:
    """Roll the trailing 30 days of workouts up into normalised stat channels.

    Args:
        workouts: Workout history; only the last 30 days are used.
        now: The caller's current time.
        recovery: Optional recovery signals feeding the intelligence bonus.
        class_weights: Character class emphasis. Defaults to 0.25 each.

    Returns:
        StatPoints with each channel in [0, 99] and the raw (unboosted)
        total XP of the recent workouts. All zero when nothing is recent.
    """
    recent = _processing_order(recent_workouts(workouts, now, STAT_WINDOW_DAYS))
    if not recent:
        return StatPoints()

    modifiers = class_modifiers(class_weights or DEFAULT_CLASS_WEIGHTS)
    points = np.zeros(4, dtype=np.float64)
    total_xp = 0.0

    for workout in recent:
        score = workout_score(workout)
        weights = np.array(stat_weights(workout.workout_type, workout.intensity), dtype=np.float64)
        points += score * weights * modifiers
        total_xp += score

    # Bonuses lift intelligence only
    points[_INTELLIGENCE] += consistency_bonus(recent, now)
    points[_INTELLIGENCE] += variety_bonus(recent)
    points[_INTELLIGENCE] += recovery_bonus_points(recovery)

    strength, speed, endurance, intelligence = (normalize(float(p)) for p in points)
    return StatPoints(
        strength=strength,
        speed=speed,
        endurance=endurance,
        intelligence=intelligence,
        total_xp=total_xp,
    )
