"""Engine outputs: stat points, level state, HP, streaks and the stats record."""

from __future__ import annotations

from dataclasses import dataclass

from stat_engine.models.enums import StatChannel


@dataclass(frozen=True)
class StatPoints:
    """Normalised stat channels (0-99) plus the raw, unboosted XP total."""

    strength: float = 0.0
    speed: float = 0.0
    endurance: float = 0.0
    intelligence: float = 0.0
    total_xp: float = 0.0


@dataclass(frozen=True)
class LevelInfo:
    level: int
    xp_current: float
    xp_to_next: float


@dataclass(frozen=True)
class HealthInfo:
    current: float
    max: float


@dataclass(frozen=True)
class StreakResult:
    """Consecutive-day streaks; ``longest`` is never below ``current``."""

    current: int = 0
    longest: int = 0


@dataclass(frozen=True)
class UserStats:
    """Character card stats, recomputed from scratch on every engine call.

    Defaults describe a brand-new character: level 1, no XP, full HP.
    ``total_xp`` is the streak-boosted XP that the level fields derive from.
    """

    strength: float = 0.0
    speed: float = 0.0
    endurance: float = 0.0
    intelligence: float = 0.0
    level: int = 1
    xp_current: float = 0.0
    xp_to_next: float = 100.0
    total_xp: float = 0.0
    hp_current: float = 100.0
    hp_max: float = 100.0
    xp_multiplier: float = 1.0

    @property
    def overall(self) -> float:
        return (self.strength + self.speed + self.endurance + self.intelligence) / 4.0

    @property
    def xp_progress(self) -> float:
        """Fraction of the current level completed, clamped to [0, 1]."""
        if self.xp_to_next <= 0:
            return 0.0
        return min(max(self.xp_current / self.xp_to_next, 0.0), 1.0)

    def stat(self, channel: StatChannel) -> float:
        return float(getattr(self, channel.value))
