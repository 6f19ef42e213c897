"""StatEngine — the orchestrator that turns workout history into character stats."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from stat_engine.exceptions import ValidationError
from stat_engine.math.aggregation import calculate_stat_points
from stat_engine.math.health import health_from
from stat_engine.math.leveling import level_from_xp, streak_xp_multiplier
from stat_engine.math.streak import calculate_streak
from stat_engine.models.character_class import CharacterClass, ClassWeights
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.user_stats import StreakResult, UserStats
from stat_engine.models.workout import Workout

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class StatEngine:
    """Computes UserStats and streaks from a workout history.

    The engine holds no state besides its clock; every call recomputes from
    the inputs. Pass a fixed clock (or an explicit ``now``) for reproducible
    results.

    Usage:
        engine = StatEngine()
        stats = engine.calculate_stats(workouts, recovery, CharacterClass.WARRIOR)
        streak = engine.calculate_streak(workouts)
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or datetime.now

    def calculate_stats(
        self,
        workouts: Iterable[Workout],
        recovery: RecoveryMetrics | None = None,
        character_class: CharacterClass | ClassWeights | None = None,
        current_streak: int | None = None,
        now: datetime | None = None,
    ) -> UserStats:
        """Compute the full stats record for one user.

        Args:
            workouts: The user's workout history (any order).
            recovery: Optional recovery signals.
            character_class: Selected class, or explicit class weights.
                None means balanced weights.
            current_streak: Pre-computed current streak. Derived from the
                workouts when None.
            now: Overrides the engine clock for this call.

        Returns:
            A fully populated UserStats. ``total_xp`` is the streak-boosted
            total that the level fields are derived from.
        """
        now = now or self.clock()
        history = tuple(workouts)
        _check_timestamps(history, now)

        points = calculate_stat_points(
            history, now, recovery=recovery, class_weights=_resolve_weights(character_class)
        )
        if current_streak is None:
            current_streak = calculate_streak(history, now).current
        xp_multiplier = streak_xp_multiplier(current_streak)
        boosted_xp = points.total_xp * xp_multiplier

        level_info = level_from_xp(boosted_xp)
        hp = health_from(history, now, level=level_info.level, recovery=recovery)

        logger.debug(
            "Computed stats for %d workouts: raw_xp=%.1f streak=%d level=%d hp=%.1f",
            len(history),
            points.total_xp,
            current_streak,
            level_info.level,
            hp.current,
        )

        return UserStats(
            strength=points.strength,
            speed=points.speed,
            endurance=points.endurance,
            intelligence=points.intelligence,
            level=level_info.level,
            xp_current=level_info.xp_current,
            xp_to_next=level_info.xp_to_next,
            total_xp=boosted_xp,
            hp_current=hp.current,
            hp_max=hp.max,
            xp_multiplier=xp_multiplier,
        )

    def calculate_streak(
        self, workouts: Iterable[Workout], now: datetime | None = None
    ) -> StreakResult:
        """Current and longest consecutive-day streaks."""
        now = now or self.clock()
        history = tuple(workouts)
        _check_timestamps(history, now)
        return calculate_streak(history, now)

    @staticmethod
    def recalculate_stats_with_xp(stats: UserStats) -> UserStats:
        """Re-derive the level fields from ``stats.total_xp`` alone.

        Used when total XP is already known (e.g. after a bonus) but the
        level fields are stale. The streak multiplier is not re-applied.
        """
        level_info = level_from_xp(stats.total_xp)
        return dataclasses.replace(
            stats,
            level=level_info.level,
            xp_current=level_info.xp_current,
            xp_to_next=level_info.xp_to_next,
        )

    @classmethod
    def award_xp(cls, stats: UserStats, bonus: float) -> UserStats:
        """Apply a flat XP bonus (or penalty when negative) and re-level.

        Total XP never drops below zero. Stat channels, HP and the streak
        multiplier are left untouched.
        """
        new_total = max(0.0, stats.total_xp + bonus)
        logger.debug("Awarding %.1f XP: total %.1f -> %.1f", bonus, stats.total_xp, new_total)
        return cls.recalculate_stats_with_xp(dataclasses.replace(stats, total_xp=new_total))


def _resolve_weights(
    character_class: CharacterClass | ClassWeights | None,
) -> ClassWeights | None:
    if character_class is None or isinstance(character_class, ClassWeights):
        return character_class
    if isinstance(character_class, CharacterClass):
        return character_class.weights
    raise ValidationError(
        f"character_class must be a CharacterClass or ClassWeights, got {character_class!r}",
        field="character_class",
    )


def _check_timestamps(workouts: tuple[Workout, ...], now: datetime) -> None:
    """Naive and aware datetimes cannot be compared; reject mixed inputs up front."""
    now_aware = now.tzinfo is not None and now.utcoffset() is not None
    for workout in workouts:
        if workout.is_timezone_aware != now_aware:
            raise ValidationError(
                "Workout created_at and now must both be timezone-aware or both naive",
                field="created_at",
            )
