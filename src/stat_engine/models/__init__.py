"""Data models for the stat engine."""

from stat_engine.models.character_class import (
    DEFAULT_CLASS_WEIGHTS,
    CharacterClass,
    ClassWeights,
    is_theme_unlocked,
)
from stat_engine.models.enums import (
    AchievementType,
    ClassTheme,
    StatChannel,
    WorkoutType,
    XPCategory,
)
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.user_stats import (
    HealthInfo,
    LevelInfo,
    StatPoints,
    StreakResult,
    UserStats,
)
from stat_engine.models.workout import Workout

__all__ = [
    "AchievementType",
    "CharacterClass",
    "ClassTheme",
    "ClassWeights",
    "DEFAULT_CLASS_WEIGHTS",
    "HealthInfo",
    "LevelInfo",
    "RecoveryMetrics",
    "StatChannel",
    "StatPoints",
    "StreakResult",
    "UserStats",
    "Workout",
    "WorkoutType",
    "XPCategory",
    "is_theme_unlocked",
]
