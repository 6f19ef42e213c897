"""Tests for stat aggregation, normalisation and intelligence bonuses."""

from __future__ import annotations

import math

import pytest

from stat_engine.math.aggregation import (
    calculate_stat_points,
    class_modifiers,
    consistency_bonus,
    normalize,
    recent_workouts,
    recovery_bonus_points,
    stat_weights,
    variety_bonus,
)
from stat_engine.math.scoring import workout_score
from stat_engine.models.character_class import CharacterClass, ClassWeights
from stat_engine.models.enums import WorkoutType
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.user_stats import StatPoints


def _days_per_week(workout_factory, pattern: list[int]) -> list:
    """One workout per day for the first N days of each trailing week."""
    return [
        workout_factory(WorkoutType.RUNNING, 30, 2, days_ago=week * 7 + day)
        for week, days in enumerate(pattern)
        for day in range(days)
    ]


class TestNormalize:
    def test_non_positive_is_zero(self) -> None:
        assert normalize(0.0) == 0.0
        assert normalize(-12.0) == 0.0

    def test_reference_points_reach_cap(self) -> None:
        assert normalize(1000.0) == pytest.approx(99.0)

    def test_capped_at_99(self) -> None:
        assert normalize(1e9) == 99.0

    def test_log_curve(self) -> None:
        assert normalize(100.0) == pytest.approx(math.log1p(100.0) / math.log1p(1000.0) * 99.0)


class TestStatWeights:
    @pytest.mark.parametrize("workout_type", list(WorkoutType))
    def test_rows_sum_to_at_most_one(self, workout_type) -> None:
        for intensity in range(1, 6):
            assert sum(stat_weights(workout_type, intensity)) <= 1.0 + 1e-9

    def test_walking_split_by_intensity(self) -> None:
        assert stat_weights(WorkoutType.WALKING, 2) == (0.0, 0.1, 0.4, 0.5)
        assert stat_weights(WorkoutType.WALKING, 3) == (0.05, 0.2, 0.6, 0.15)

    def test_mind_body_types_feed_intelligence(self) -> None:
        for workout_type in (WorkoutType.YOGA, WorkoutType.STRETCHING, WorkoutType.MEDITATION):
            assert stat_weights(workout_type, 3) == (0.0, 0.0, 0.1, 0.9)


class TestClassModifiers:
    def test_default_weights_are_neutral(self) -> None:
        mods = class_modifiers(ClassWeights(0.25, 0.25, 0.25, 0.25))
        assert mods.tolist() == pytest.approx([1.0, 1.0, 1.0, 1.0])

    def test_warrior(self) -> None:
        mods = class_modifiers(CharacterClass.WARRIOR.weights)
        assert mods.tolist() == pytest.approx([1.06, 0.94, 1.03, 0.97])

    def test_zero_weight_keeps_base(self) -> None:
        mods = class_modifiers(ClassWeights(0.0, 0.0, 0.0, 0.0))
        assert mods.tolist() == pytest.approx([0.85] * 4)


class TestConsistencyBonus:
    def test_four_to_six_days_top_band(self, workout_factory, now) -> None:
        assert consistency_bonus(_days_per_week(workout_factory, [5, 5, 5, 5]), now) == 60.0

    def test_three_days(self, workout_factory, now) -> None:
        assert consistency_bonus(_days_per_week(workout_factory, [3, 3, 3, 3]), now) == 40.0

    def test_between_six_and_seven_falls_to_second_band(self, workout_factory, now) -> None:
        assert consistency_bonus(_days_per_week(workout_factory, [7, 6, 7, 6]), now) == 40.0

    def test_every_day_drops_to_low_band(self, workout_factory, now) -> None:
        # Overlapping bands are first-match-wins: 7.0 misses both 4-6 and 3-<7
        assert consistency_bonus(_days_per_week(workout_factory, [7, 7, 7, 7]), now) == 20.0

    def test_two_days(self, workout_factory, now) -> None:
        assert consistency_bonus(_days_per_week(workout_factory, [2, 2, 2, 2]), now) == 20.0

    def test_sparse_scales_linearly(self, workout_factory, now) -> None:
        assert consistency_bonus(_days_per_week(workout_factory, [1, 1, 1, 1]), now) == 10.0
        assert consistency_bonus(_days_per_week(workout_factory, [1]), now) == 2.5

    def test_same_day_counts_once(self, workout_factory, now) -> None:
        workouts = [workout_factory(days_ago=0), workout_factory(days_ago=0.1)]
        assert consistency_bonus(workouts, now) == 2.5

    def test_ignores_future_and_old_workouts(self, workout_factory, now) -> None:
        workouts = [workout_factory(days_ago=-1), workout_factory(days_ago=29)]
        assert consistency_bonus(workouts, now) == 0.0


class TestVarietyBonus:
    def test_partial(self, workout_factory) -> None:
        workouts = [
            workout_factory(WorkoutType.RUNNING),
            workout_factory(WorkoutType.YOGA),
            workout_factory(WorkoutType.YOGA),
            workout_factory(WorkoutType.STRENGTH),
        ]
        assert variety_bonus(workouts) == pytest.approx(20.0)

    def test_capped(self, workout_factory) -> None:
        workouts = [workout_factory(t) for t in WorkoutType]
        assert variety_bonus(workouts) == 40.0


class TestRecoveryBonusPoints:
    def test_absent_is_zero(self) -> None:
        assert recovery_bonus_points(None) == 0.0
        assert recovery_bonus_points(RecoveryMetrics()) == 0.0

    def test_all_signals_maxed(self, well_rested: RecoveryMetrics) -> None:
        assert recovery_bonus_points(well_rested) == pytest.approx(120.0)

    def test_sleep_off_target(self) -> None:
        # 6.25 h is 1.75 h short of 8 h: half score
        assert recovery_bonus_points(RecoveryMetrics(sleep_minutes_7d=375.0)) == pytest.approx(35.0)

    def test_poor_sleep_scores_nothing(self, poorly_rested: RecoveryMetrics) -> None:
        assert recovery_bonus_points(poorly_rested) == 0.0

    def test_signals_clamped(self) -> None:
        recovery = RecoveryMetrics(
            hrv_sdnn_ms=10.0, resting_heart_rate_bpm=100.0, heart_rate_recovery_1min_bpm=5.0
        )
        assert recovery_bonus_points(recovery) == 0.0


class TestRecentWorkouts:
    def test_window_boundary_inclusive(self, workout_factory, now) -> None:
        edge = workout_factory(days_ago=30)
        stale = workout_factory(days_ago=30.01)
        assert recent_workouts([edge, stale], now, 30) == [edge]


class TestCalculateStatPoints:
    def test_empty_history(self, now) -> None:
        assert calculate_stat_points([], now) == StatPoints()

    def test_only_stale_workouts(self, workout_factory, now) -> None:
        result = calculate_stat_points([workout_factory(days_ago=45)], now)
        assert result == StatPoints()

    def test_single_strength_workout(self, scenario_a_workout, now) -> None:
        result = calculate_stat_points([scenario_a_workout], now)
        assert result.total_xp == pytest.approx(468.0)
        assert result.strength > result.speed
        assert result.strength > result.endurance
        assert result.strength > result.intelligence
        assert result.strength == pytest.approx(normalize(468.0 * 0.7))

    def test_intelligence_collects_bonuses(self, scenario_a_workout, now) -> None:
        result = calculate_stat_points([scenario_a_workout], now)
        # No intelligence weight for strength: consistency 2.5 + variety 40/6
        assert result.intelligence == pytest.approx(normalize(2.5 + 40.0 / 6.0))

    def test_recovery_only_lifts_intelligence(self, mixed_history, well_rested, now) -> None:
        without = calculate_stat_points(mixed_history, now)
        with_recovery = calculate_stat_points(mixed_history, now, recovery=well_rested)
        assert with_recovery.intelligence > without.intelligence
        assert with_recovery.strength == without.strength
        assert with_recovery.speed == without.speed
        assert with_recovery.endurance == without.endurance
        assert with_recovery.total_xp == without.total_xp

    def test_class_weights_bias_channels(self, workout_factory, now) -> None:
        history = [
            workout_factory(WorkoutType.STRENGTH, 10, 3),
            workout_factory(WorkoutType.RUNNING, 10, 3, days_ago=1),
        ]
        balanced = calculate_stat_points(history, now)
        brute = calculate_stat_points(history, now, class_weights=ClassWeights(1.0, 0.0, 0.0, 0.0))
        assert brute.strength < 99.0
        assert brute.strength > balanced.strength
        assert brute.speed < balanced.speed
        assert brute.total_xp == balanced.total_xp

    def test_total_xp_is_sum_of_recent_scores(self, mixed_history, workout_factory, now) -> None:
        history = mixed_history + [workout_factory(days_ago=60)]
        result = calculate_stat_points(history, now)
        assert result.total_xp == pytest.approx(sum(workout_score(w) for w in mixed_history))

    def test_order_independent(self, mixed_history, now) -> None:
        forward = calculate_stat_points(mixed_history, now)
        backward = calculate_stat_points(list(reversed(mixed_history)), now)
        assert forward == backward

    def test_channels_bounded(self, workout_factory, now) -> None:
        heavy = [
            workout_factory(WorkoutType.OTHER, 240, 5, days_ago=d, energy_burned_kcal=5000.0)
            for d in range(30)
        ]
        result = calculate_stat_points(heavy, now)
        for value in (result.strength, result.speed, result.endurance, result.intelligence):
            assert 0.0 <= value <= 99.0
