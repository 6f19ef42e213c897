"""HP model: recent training load drains HP, recovery restores it.

    load_norm = clamp(ln(1 + load_7d) / ln(1 + 2000), 0, 1)
    novice    = clamp(1 - (level - 1) / 24, 0, 1)
    hp        = clamp(55 + 5·novice + recovery·(35 + 6·novice)
                      - load_norm·(40 - 12·novice),
                      10 + 5·novice, 100)

Low-level characters get a cushion (higher floor and baseline, softer load
penalty) that fades out completely by level 25.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

from stat_engine.math.aggregation import (
    hrr_score,
    hrv_score,
    mindful_score,
    recent_workouts,
    resting_hr_score,
    sleep_score,
)
from stat_engine.math.scoring import workout_score
from stat_engine.models.enums import (
    DEFAULT_RECOVERY_SCORE,
    HEALTH_WINDOW_DAYS,
    HP_BASELINE,
    HP_BASELINE_NOVICE,
    HP_FLOOR,
    HP_FLOOR_NOVICE,
    HP_LOAD_NORMALIZATION,
    HP_LOAD_PENALTY,
    HP_LOAD_PENALTY_NOVICE_RELIEF,
    HP_MAX,
    HP_RECOVERY_BONUS,
    HP_RECOVERY_BONUS_NOVICE,
    MAX_RECOVERY_SCORE,
    MIN_RECOVERY_SCORE,
    MINDFUL_RECOVERY_SCALE,
    NOVICE_LEVEL_SPAN,
)
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.user_stats import HealthInfo
from stat_engine.models.workout import Workout


def recovery_score_normalized(recovery: RecoveryMetrics | None) -> float:
    """Plain average of the available recovery signals, clamped to [0.2, 1.0].

    Returns 0.5 when there is no recovery data at all. Unlike the
    intelligence bonus, signals are not weighted; mindful minutes count at
    half value.
    """
    if recovery is None or not recovery.has_signal():
        return DEFAULT_RECOVERY_SCORE

    scores: list[float] = []
    if recovery.sleep_minutes_7d is not None:
        scores.append(sleep_score(recovery.sleep_minutes_7d))
    if recovery.mindful_minutes_7d is not None:
        scores.append(mindful_score(recovery.mindful_minutes_7d) * MINDFUL_RECOVERY_SCALE)
    if recovery.hrv_sdnn_ms is not None:
        scores.append(hrv_score(recovery.hrv_sdnn_ms))
    if recovery.resting_heart_rate_bpm is not None:
        scores.append(resting_hr_score(recovery.resting_heart_rate_bpm))
    if recovery.heart_rate_recovery_1min_bpm is not None:
        scores.append(hrr_score(recovery.heart_rate_recovery_1min_bpm))

    average = sum(scores) / len(scores)
    return min(max(average, MIN_RECOVERY_SCORE), MAX_RECOVERY_SCORE)


def novice_factor(level: int) -> float:
    """1.0 at level 1, 0.0 from level 25 on."""
    return max(0.0, min(1.0, 1.0 - (level - 1) / NOVICE_LEVEL_SPAN))


def training_load(workouts: Iterable[Workout], now: datetime) -> float:
    """Sum of workout scores over the trailing 7 days."""
    return sum(workout_score(w) for w in recent_workouts(workouts, now, HEALTH_WINDOW_DAYS))


def health_from(
    workouts: Iterable[Workout],
    now: datetime,
    level: int,
    recovery: RecoveryMetrics | None = None,
) -> HealthInfo:
    """Derive current and max HP from 7-day load, recovery and level."""
    load = training_load(workouts, now)
    load_norm = min(max(math.log1p(load) / math.log1p(HP_LOAD_NORMALIZATION), 0.0), 1.0)

    recovery_score = recovery_score_normalized(recovery)
    novice = novice_factor(level)

    penalty = load_norm * (HP_LOAD_PENALTY - HP_LOAD_PENALTY_NOVICE_RELIEF * novice)
    bonus = recovery_score * (HP_RECOVERY_BONUS + HP_RECOVERY_BONUS_NOVICE * novice)
    floor = HP_FLOOR + HP_FLOOR_NOVICE * novice
    current = min(max((HP_BASELINE + HP_BASELINE_NOVICE * novice) + bonus - penalty, floor), HP_MAX)

    return HealthInfo(current=current, max=HP_MAX)
