"""Belt challenge scoring between two users.

A belt challenge compares the XP two users earned over the same window on
one stat (or overall). Single-stat challenges handicap the class that
weights the contested stat less, scaling it up to the stronger class's
weight so a speed class and a strength class can fairly fight over speed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from stat_engine.math.scoring import workout_score
from stat_engine.models.character_class import ClassWeights
from stat_engine.models.enums import StatChannel
from stat_engine.models.workout import Workout

logger = logging.getLogger(__name__)

# Flat XP applied with StatEngine.award_xp when the opponent answers
CHALLENGE_ACCEPT_XP_BONUS = 100.0
CHALLENGE_DECLINE_XP_PENALTY = -100.0


class BeltStat(str, Enum):
    """Stats a belt can be held for."""

    STRENGTH = "strength"
    SPEED = "speed"
    ENDURANCE = "endurance"
    INTELLIGENCE = "intelligence"
    OVERALL = "overall"


class ChallengeRole(str, Enum):
    CHALLENGER = "challenger"
    OPPONENT = "opponent"


@dataclass(frozen=True)
class ChallengeOutcome:
    """Scores for both sides and which side takes the belt."""

    stat: BeltStat
    challenger_score: float
    opponent_score: float
    winner: ChallengeRole


def stat_xp(
    workouts: Iterable[Workout],
    stat: StatChannel,
    class_weights: ClassWeights,
    class_multiplier: float,
) -> float:
    """Total workout XP scaled by the class's weight on *stat* and a handicap."""
    factor = class_weights.weight_for(stat) * class_multiplier
    return sum(workout_score(w) * factor for w in workouts)


def overall_xp(workouts: Iterable[Workout], class_weights: ClassWeights) -> float:
    """Total workout XP scaled by the class's summed weights (1.0 if all zero)."""
    total_weight = class_weights.total
    factor = total_weight if total_weight > 0 else 1.0
    return sum(workout_score(w) * factor for w in workouts)


def _handicap(own_weight: float, max_weight: float) -> float:
    return max_weight / own_weight if own_weight > 0 else 1.0


def resolve_belt_challenge(
    challenger_workouts: Iterable[Workout],
    opponent_workouts: Iterable[Workout],
    stat: BeltStat,
    challenger_weights: ClassWeights,
    opponent_weights: ClassWeights,
) -> ChallengeOutcome:
    """Score a completed belt challenge. Ties go to the challenger.

    Args:
        challenger_workouts: Challenger's workouts inside the challenge window.
        opponent_workouts: Opponent's workouts inside the same window.
        stat: The contested stat.
        challenger_weights: Challenger's class weights.
        opponent_weights: Opponent's class weights.

    Returns:
        ChallengeOutcome with both scores and the winning side.
    """
    if stat == BeltStat.OVERALL:
        challenger_score = overall_xp(challenger_workouts, challenger_weights)
        opponent_score = overall_xp(opponent_workouts, opponent_weights)
    else:
        channel = StatChannel(stat.value)
        challenger_weight = challenger_weights.weight_for(channel)
        opponent_weight = opponent_weights.weight_for(channel)
        max_weight = max(challenger_weight, opponent_weight)
        challenger_score = stat_xp(
            challenger_workouts, channel, challenger_weights,
            _handicap(challenger_weight, max_weight),
        )
        opponent_score = stat_xp(
            opponent_workouts, channel, opponent_weights,
            _handicap(opponent_weight, max_weight),
        )

    winner = (
        ChallengeRole.CHALLENGER if challenger_score >= opponent_score
        else ChallengeRole.OPPONENT
    )
    logger.debug(
        "Belt challenge on %s: challenger=%.1f opponent=%.1f winner=%s",
        stat.value, challenger_score, opponent_score, winner.value,
    )
    return ChallengeOutcome(
        stat=stat,
        challenger_score=challenger_score,
        opponent_score=opponent_score,
        winner=winner,
    )
