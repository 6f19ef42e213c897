"""Level curve: exponential per-level XP cost, capped at level 99.

    xp_for_level(n) = 100 × 1.15^(n-1)

Reaching level n therefore costs sum(xp_for_level(i) for i < n) in total.
At the cap, surplus XP keeps accumulating in ``xp_current`` (it may exceed
``xp_to_next``) but the level no longer advances.
"""

from __future__ import annotations

from stat_engine.exceptions import ValidationError
from stat_engine.models.enums import (
    BASE_LEVEL_XP,
    LEVEL_XP_GROWTH,
    MAX_LEVEL,
    MAX_STREAK_BOOST,
    STREAK_BOOST_PER_DAY,
)
from stat_engine.models.user_stats import LevelInfo


def xp_for_level(level: int) -> float:
    """XP needed to advance from *level* to *level* + 1."""
    return BASE_LEVEL_XP * LEVEL_XP_GROWTH ** max(level - 1, 0)


def cumulative_xp_for_level(level: int) -> float:
    """Total XP needed to reach *level* from zero."""
    return sum(xp_for_level(i) for i in range(1, max(level, 1)))


def level_from_xp(total_xp: float) -> LevelInfo:
    """Convert accumulated XP into level, progress within it, and next cost.

    Negative totals are treated as zero.
    """
    level = 1
    remaining = max(0.0, float(total_xp))
    next_cost = xp_for_level(level)

    while remaining >= next_cost and level < MAX_LEVEL:
        remaining -= next_cost
        level += 1
        next_cost = xp_for_level(level)

    return LevelInfo(level=level, xp_current=remaining, xp_to_next=next_cost)


def level_info_from_xp(total_xp: float) -> LevelInfo:
    return level_from_xp(total_xp)


def streak_xp_multiplier(current_streak: int) -> float:
    """XP multiplier for an active streak: +1% per day, capped at +25%."""
    if current_streak < 0:
        raise ValidationError(
            f"current_streak must be >= 0, got {current_streak}", field="current_streak"
        )
    return 1.0 + min(current_streak * STREAK_BOOST_PER_DAY, MAX_STREAK_BOOST)
