"""Tests for achievement criteria and XP bonuses."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stat_engine.achievements import (
    ACHIEVEMENT_RULES,
    achievement_xp_bonus,
    evaluate_achievements,
    rule_for,
)
from stat_engine.math.streak import calculate_streak
from stat_engine.models.enums import AchievementType, WorkoutType
from stat_engine.models.user_stats import StreakResult
from stat_engine.models.workout import Workout

NO_STREAK = StreakResult()


def _at_hour(hour: int, count: int, now: datetime) -> list[Workout]:
    base = now.replace(hour=hour, minute=15)
    return [
        Workout(WorkoutType.RUNNING, 30, 3, base - timedelta(days=d + 1))
        for d in range(count)
    ]


class TestRuleTable:
    def test_one_rule_per_achievement(self) -> None:
        assert [r.achievement for r in ACHIEVEMENT_RULES] == list(AchievementType)

    def test_bonuses(self) -> None:
        assert rule_for(AchievementType.FIRST_BLOOD).xp_bonus == 100
        assert rule_for(AchievementType.LEGENDARY_DISCIPLINE).xp_bonus == 1500
        assert rule_for(AchievementType.DADDY_OF_THE_MONTH).xp_bonus == 1000

    def test_social_achievements_have_no_criterion(self) -> None:
        assert rule_for(AchievementType.SOCIAL_BUTTERFLY).criterion is None
        assert rule_for(AchievementType.IDENTITY_CRISIS).criterion is None

    def test_xp_bonus_sum(self) -> None:
        total = achievement_xp_bonus([AchievementType.FIRST_BLOOD, AchievementType.IRON_WILL])
        assert total == 350.0
        assert achievement_xp_bonus([]) == 0.0


class TestEvaluateAchievements:
    def test_empty_history(self, now) -> None:
        assert evaluate_achievements([], NO_STREAK, now) == ()

    def test_first_workout(self, workout_factory, now) -> None:
        earned = evaluate_achievements([workout_factory()], NO_STREAK, now)
        assert earned == (AchievementType.FIRST_BLOOD,)

    def test_mixed_history(self, mixed_history, now) -> None:
        streak = calculate_streak(mixed_history, now)
        assert evaluate_achievements(mixed_history, streak, now) == (
            AchievementType.FIRST_BLOOD,
            AchievementType.RENAISSANCE_MAN,
            AchievementType.MASTER_OF_ALL,
        )

    def test_already_unlocked_not_reported(self, mixed_history, now) -> None:
        streak = calculate_streak(mixed_history, now)
        earned = evaluate_achievements(
            mixed_history, streak, now,
            unlocked={AchievementType.FIRST_BLOOD, AchievementType.MASTER_OF_ALL},
        )
        assert earned == (AchievementType.RENAISSANCE_MAN,)

    @pytest.mark.parametrize(
        "longest, expected",
        [
            (6, set()),
            (7, {AchievementType.IRON_WILL}),
            (14, {AchievementType.IRON_WILL, AchievementType.GETTING_SERIOUS}),
            (
                60,
                {
                    AchievementType.IRON_WILL,
                    AchievementType.GETTING_SERIOUS,
                    AchievementType.UNSTOPPABLE,
                    AchievementType.LEGENDARY_DISCIPLINE,
                },
            ),
        ],
    )
    def test_streak_tiers_use_longest(self, workout_factory, now, longest: int, expected) -> None:
        earned = evaluate_achievements(
            [workout_factory()], StreakResult(current=0, longest=longest), now,
            unlocked={AchievementType.FIRST_BLOOD},
        )
        assert set(earned) == expected

    def test_beast_mode(self, workout_factory, now) -> None:
        workouts = [workout_factory(days_ago=d * 1.4) for d in range(20)]
        assert AchievementType.BEAST_MODE in evaluate_achievements(workouts, NO_STREAK, now)

    def test_beast_mode_ignores_old_workouts(self, workout_factory, now) -> None:
        workouts = [workout_factory(days_ago=40 + d) for d in range(25)]
        assert AchievementType.BEAST_MODE not in evaluate_achievements(workouts, NO_STREAK, now)

    def test_zen_master(self, workout_factory, now) -> None:
        workouts = [workout_factory(WorkoutType.MEDITATION, 10, 1, days_ago=d * 5) for d in range(10)]
        assert AchievementType.ZEN_MASTER in evaluate_achievements(workouts, NO_STREAK, now)

    def test_distance_demon_counts_estimates(self, workout_factory, now) -> None:
        # 150 m/min estimated running pace: 20 × 60 min = 180 km
        workouts = [workout_factory(WorkoutType.RUNNING, 60, 3, days_ago=d) for d in range(20)]
        assert AchievementType.DISTANCE_DEMON in evaluate_achievements(workouts, NO_STREAK, now)

    def test_distance_demon_uses_measured_distance(self, workout_factory, now) -> None:
        workouts = [
            workout_factory(WorkoutType.RUNNING, 60, 3, days_ago=d, distance_meters=1000.0)
            for d in range(20)
        ]
        assert AchievementType.DISTANCE_DEMON not in evaluate_achievements(workouts, NO_STREAK, now)

    def test_time_lord(self, workout_factory, now) -> None:
        workouts = [workout_factory(WorkoutType.YOGA, 120, 2, days_ago=d) for d in range(50)]
        assert AchievementType.TIME_LORD in evaluate_achievements(workouts, NO_STREAK, now)

    def test_power_house_and_cardio_king(self, workout_factory, now) -> None:
        strength = [workout_factory(WorkoutType.STRENGTH, days_ago=d) for d in range(50)]
        cardio = [
            workout_factory(t, 20, 3, days_ago=d)
            for d, t in enumerate([WorkoutType.HIIT, WorkoutType.SWIMMING] * 24)
        ]
        earned = evaluate_achievements(strength + cardio, NO_STREAK, now)
        assert AchievementType.POWER_HOUSE in earned
        assert AchievementType.CARDIO_KING not in earned

    def test_early_riser(self, now) -> None:
        earned = evaluate_achievements(_at_hour(6, 10, now), NO_STREAK, now)
        assert AchievementType.EARLY_RISER in earned
        assert AchievementType.NIGHT_WARRIOR not in earned

    def test_night_warrior(self, now) -> None:
        earned = evaluate_achievements(_at_hour(22, 10, now), NO_STREAK, now)
        assert AchievementType.NIGHT_WARRIOR in earned
        assert AchievementType.EARLY_RISER not in earned

    def test_hours_read_in_callers_zone(self) -> None:
        plus_five = timezone(timedelta(hours=5))
        now = datetime(2026, 3, 15, 12, 0, tzinfo=plus_five)
        # 05:00 UTC is 10:00 at UTC+5
        workouts = [
            Workout(WorkoutType.RUNNING, 30, 3, datetime(2026, 3, d, 5, 0, tzinfo=timezone.utc))
            for d in range(1, 11)
        ]
        assert AchievementType.EARLY_RISER not in evaluate_achievements(workouts, NO_STREAK, now)
