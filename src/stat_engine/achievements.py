"""Achievement criteria evaluated against a workout history.

Each achievement is one row of ``ACHIEVEMENT_RULES``: its XP bonus, a
description, and a criterion over an ``AchievementContext``. Achievements
that depend on social or account activity (pokes, reactions, class
changes, group size) have no criterion here and are never reported; they
are unlocked by whoever tracks that activity.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass
from datetime import datetime

from stat_engine.math.aggregation import recent_workouts
from stat_engine.math.scoring import resolve_distance_meters
from stat_engine.models.enums import METERS_PER_MILE, AchievementType, WorkoutType
from stat_engine.models.user_stats import StreakResult
from stat_engine.models.workout import Workout

logger = logging.getLogger(__name__)

_CARDIO_TYPES = frozenset({
    WorkoutType.RUNNING,
    WorkoutType.CYCLING,
    WorkoutType.SWIMMING,
    WorkoutType.HIIT,
})

EARLY_RISER_BEFORE_HOUR = 8
NIGHT_WARRIOR_FROM_HOUR = 21


@dataclass(frozen=True)
class AchievementContext:
    """Everything a criterion may look at."""

    workouts: tuple[Workout, ...]
    streak: StreakResult
    now: datetime

    def local_hour(self, workout: Workout) -> int:
        created = workout.created_at
        if created.tzinfo is not None and self.now.tzinfo is not None:
            created = created.astimezone(self.now.tzinfo)
        return created.hour

    def count(self, predicate: Callable[[Workout], bool]) -> int:
        return sum(1 for w in self.workouts if predicate(w))


Criterion = Callable[[AchievementContext], bool]


@dataclass(frozen=True)
class AchievementRule:
    achievement: AchievementType
    xp_bonus: float
    description: str
    criterion: Criterion | None = None


def _streak_at_least(days: int) -> Criterion:
    return lambda ctx: ctx.streak.longest >= days


def _count_at_least(n: int, predicate: Callable[[Workout], bool]) -> Criterion:
    return lambda ctx: ctx.count(predicate) >= n


def _types_in_last_week(ctx: AchievementContext) -> int:
    return len({w.workout_type for w in recent_workouts(ctx.workouts, ctx.now, 7)})


def _total_miles(ctx: AchievementContext) -> float:
    return sum(resolve_distance_meters(w) for w in ctx.workouts) / METERS_PER_MILE


def _total_hours(ctx: AchievementContext) -> float:
    return sum(w.duration_minutes for w in ctx.workouts) / 60.0


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule(AchievementType.FIRST_BLOOD, 100, "Log your first workout",
                    lambda ctx: len(ctx.workouts) >= 1),
    AchievementRule(AchievementType.IRON_WILL, 250, "7-day workout streak",
                    _streak_at_least(7)),
    AchievementRule(AchievementType.RENAISSANCE_MAN, 200, "5 different workout types in a week",
                    lambda ctx: _types_in_last_week(ctx) >= 5),
    AchievementRule(AchievementType.BEAST_MODE, 400, "Log 20 workouts in a month",
                    lambda ctx: len(recent_workouts(ctx.workouts, ctx.now, 30)) >= 20),
    AchievementRule(AchievementType.ZEN_MASTER, 200, "10 mindfulness sessions",
                    _count_at_least(10, lambda w: w.workout_type == WorkoutType.MEDITATION)),
    AchievementRule(AchievementType.ACCOUNTABILITY_PARTNER, 150, "Poke 10 friends"),
    AchievementRule(AchievementType.DADDY_OF_THE_MONTH, 1000, "Highest overall level at month end"),
    AchievementRule(AchievementType.IDENTITY_CRISIS, 150, "Change your class 3 times"),
    AchievementRule(AchievementType.TRIPLE_THREAT, 250, "Try all 3 class themes"),
    AchievementRule(AchievementType.SPORTS_LEGEND, 300, "Use a Sports class for 30 days"),
    AchievementRule(AchievementType.FANTASY_HERO, 300, "Use a Fantasy class for 30 days"),
    AchievementRule(AchievementType.SCIFI_COMMANDER, 300, "Use a Sci-Fi class for 30 days"),
    AchievementRule(AchievementType.LOYAL_TO_THE_END, 400, "Keep same class for 60 days"),
    AchievementRule(AchievementType.GETTING_SERIOUS, 300, "14-day workout streak",
                    _streak_at_least(14)),
    AchievementRule(AchievementType.UNSTOPPABLE, 750, "30-day workout streak",
                    _streak_at_least(30)),
    AchievementRule(AchievementType.LEGENDARY_DISCIPLINE, 1500, "60-day workout streak",
                    _streak_at_least(60)),
    AchievementRule(AchievementType.MASTER_OF_ALL, 400, "Log all 10 workout types",
                    lambda ctx: {w.workout_type for w in ctx.workouts} == set(WorkoutType)),
    AchievementRule(AchievementType.DISTANCE_DEMON, 500, "Log 100 total miles",
                    lambda ctx: _total_miles(ctx) >= 100.0),
    AchievementRule(AchievementType.TIME_LORD, 500, "Log 100 total hours of workouts",
                    lambda ctx: _total_hours(ctx) >= 100.0),
    AchievementRule(AchievementType.POWER_HOUSE, 350, "Log 50 strength workouts",
                    _count_at_least(50, lambda w: w.workout_type == WorkoutType.STRENGTH)),
    AchievementRule(AchievementType.CARDIO_KING, 350, "Log 50 cardio workouts",
                    _count_at_least(50, lambda w: w.workout_type in _CARDIO_TYPES)),
    AchievementRule(AchievementType.SOCIAL_BUTTERFLY, 200, "React to 50 feed items"),
    AchievementRule(AchievementType.SUPER_MOTIVATOR, 300, "Poke 25 friends"),
    AchievementRule(AchievementType.BELT_MASTER, 600, "Win 5 belt challenges"),
    AchievementRule(AchievementType.CHALLENGE_CHAMPION, 500, "Complete 10 group challenges"),
    AchievementRule(AchievementType.SQUAD_GOALS, 200, "Be in a group with 8+ members"),
    AchievementRule(AchievementType.EARLY_RISER, 250, "Log 10 workouts before 8am",
                    lambda ctx: ctx.count(
                        lambda w: ctx.local_hour(w) < EARLY_RISER_BEFORE_HOUR) >= 10),
    AchievementRule(AchievementType.NIGHT_WARRIOR, 250, "Log 10 workouts after 9pm",
                    lambda ctx: ctx.count(
                        lambda w: ctx.local_hour(w) >= NIGHT_WARRIOR_FROM_HOUR) >= 10),
    AchievementRule(AchievementType.CONSISTENT_USER, 400, "Open app 30 days in a row"),
)

_RULES_BY_TYPE: dict[AchievementType, AchievementRule] = {
    rule.achievement: rule for rule in ACHIEVEMENT_RULES
}


def rule_for(achievement: AchievementType) -> AchievementRule:
    return _RULES_BY_TYPE[achievement]


def evaluate_achievements(
    workouts: Iterable[Workout],
    streak: StreakResult,
    now: datetime,
    unlocked: Collection[AchievementType] = (),
) -> tuple[AchievementType, ...]:
    """Return achievements newly satisfied by the history, in table order.

    Args:
        workouts: Full workout history.
        streak: Streaks for the same history.
        now: The caller's current time.
        unlocked: Achievements the user already holds; never re-reported.

    Returns:
        Achievement types whose criteria now hold and that are not yet
        unlocked.
    """
    ctx = AchievementContext(workouts=tuple(workouts), streak=streak, now=now)
    already = set(unlocked)
    earned = tuple(
        rule.achievement
        for rule in ACHIEVEMENT_RULES
        if rule.criterion is not None
        and rule.achievement not in already
        and rule.criterion(ctx)
    )
    if earned:
        logger.debug("Newly met achievements: %s", ", ".join(a.value for a in earned))
    return earned


def achievement_xp_bonus(achievements: Iterable[AchievementType]) -> float:
    """Summed XP bonus for a set of achievements."""
    return float(sum(rule_for(a).xp_bonus for a in achievements))
