"""Character classes and the stat weights that bias their progression."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from stat_engine.exceptions import ValidationError
from stat_engine.models.enums import STAT_CHANNELS, ClassTheme, StatChannel


@dataclass(frozen=True)
class ClassWeights:
    """Per-class emphasis on each stat channel.

    Weights are non-negative but need not sum to 1; the aggregator only uses
    them through the class modifier ``0.85 + weight * 0.6``.
    """

    strength: float
    speed: float
    endurance: float
    intelligence: float

    def __post_init__(self) -> None:
        for channel in STAT_CHANNELS:
            value = getattr(self, channel.value)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(
                    f"{channel.value} weight must be a number, got {value!r}",
                    field=channel.value,
                )
            if not math.isfinite(value) or value < 0:
                raise ValidationError(
                    f"{channel.value} weight must be finite and >= 0, got {value!r}",
                    field=channel.value,
                )

    def weight_for(self, channel: StatChannel) -> float:
        return float(getattr(self, channel.value))

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Weights in canonical channel order (str, spd, end, int)."""
        strength, speed, endurance, intelligence = (self.weight_for(c) for c in STAT_CHANNELS)
        return (strength, speed, endurance, intelligence)

    @property
    def total(self) -> float:
        return self.strength + self.speed + self.endurance + self.intelligence


DEFAULT_CLASS_WEIGHTS = ClassWeights(
    strength=0.25, speed=0.25, endurance=0.25, intelligence=0.25
)


class CharacterClass(str, Enum):
    """Selectable character archetypes, eight per theme."""

    # Fantasy
    WARRIOR = "warrior"
    SCOUT = "scout"
    KNIGHT = "knight"
    WIZARD = "wizard"
    THIEF = "thief"
    BERSERKER = "berserker"
    SWORDMASTER = "swordmaster"
    ELF = "elf"
    # Sports
    SHORTSTOP = "shortstop"
    QUARTERBACK = "quarterback"
    RACECAR_DRIVER = "racecarDriver"
    ENFORCER = "enforcer"
    GOLFER = "golfer"
    POWER_FORWARD = "powerForward"
    GOALIE = "goalie"
    STRIKER = "striker"
    # Sci-fi
    STARFIGHTER_PILOT = "starfighterPilot"
    STARFLEET_CAPTAIN = "starfleetCaptain"
    BORG_JUGGERNAUT = "borgJuggernaut"
    XENOMORPH = "xenomorph"
    ANDROID_MEDIC = "androidMedic"
    WARP_ENGINEER = "warpEngineer"
    ZERO_G_RANGER = "zeroGRanger"
    VOID_MONK = "voidMonk"

    @property
    def weights(self) -> ClassWeights:
        return _CLASS_WEIGHTS[self]

    @property
    def theme(self) -> ClassTheme:
        return _CLASS_THEMES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self, self.name.replace("_", " ").title())

    @classmethod
    def from_name(cls, name: str) -> CharacterClass:
        """Look up a class by stored value or enum name, case-insensitively."""
        wanted = name.strip().lower().replace("-", "_")
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        raise ValidationError(f"Unknown character class: {name!r}", field="character_class")


def _w(strength: float, speed: float, endurance: float, intelligence: float) -> ClassWeights:
    return ClassWeights(strength, speed, endurance, intelligence)


_CLASS_WEIGHTS: dict[CharacterClass, ClassWeights] = {
    CharacterClass.WARRIOR: _w(0.35, 0.15, 0.30, 0.20),
    CharacterClass.SCOUT: _w(0.15, 0.35, 0.30, 0.20),
    CharacterClass.KNIGHT: _w(0.30, 0.15, 0.35, 0.20),
    CharacterClass.WIZARD: _w(0.20, 0.15, 0.30, 0.35),
    CharacterClass.THIEF: _w(0.30, 0.35, 0.20, 0.15),
    CharacterClass.BERSERKER: _w(0.35, 0.15, 0.30, 0.20),
    CharacterClass.SWORDMASTER: _w(0.35, 0.30, 0.20, 0.15),
    CharacterClass.ELF: _w(0.15, 0.20, 0.30, 0.35),
    CharacterClass.SHORTSTOP: _w(0.10, 0.40, 0.20, 0.30),
    CharacterClass.QUARTERBACK: _w(0.35, 0.20, 0.15, 0.30),
    CharacterClass.RACECAR_DRIVER: _w(0.15, 0.40, 0.30, 0.15),
    CharacterClass.ENFORCER: _w(0.40, 0.15, 0.30, 0.15),
    CharacterClass.GOLFER: _w(0.20, 0.15, 0.30, 0.35),
    CharacterClass.POWER_FORWARD: _w(0.40, 0.30, 0.20, 0.10),
    CharacterClass.GOALIE: _w(0.35, 0.15, 0.20, 0.30),
    CharacterClass.STRIKER: _w(0.30, 0.40, 0.20, 0.10),
    CharacterClass.STARFIGHTER_PILOT: _w(0.15, 0.35, 0.30, 0.20),
    CharacterClass.STARFLEET_CAPTAIN: _w(0.20, 0.15, 0.30, 0.35),
    CharacterClass.BORG_JUGGERNAUT: _w(0.35, 0.10, 0.35, 0.20),
    CharacterClass.XENOMORPH: _w(0.30, 0.35, 0.20, 0.15),
    CharacterClass.ANDROID_MEDIC: _w(0.15, 0.20, 0.30, 0.35),
    CharacterClass.WARP_ENGINEER: _w(0.30, 0.20, 0.15, 0.35),
    CharacterClass.ZERO_G_RANGER: _w(0.20, 0.35, 0.30, 0.15),
    CharacterClass.VOID_MONK: _w(0.20, 0.15, 0.30, 0.35),
}

_FANTASY = (
    CharacterClass.WARRIOR,
    CharacterClass.SCOUT,
    CharacterClass.KNIGHT,
    CharacterClass.WIZARD,
    CharacterClass.THIEF,
    CharacterClass.BERSERKER,
    CharacterClass.SWORDMASTER,
    CharacterClass.ELF,
)
_SPORTS = (
    CharacterClass.SHORTSTOP,
    CharacterClass.QUARTERBACK,
    CharacterClass.RACECAR_DRIVER,
    CharacterClass.ENFORCER,
    CharacterClass.GOLFER,
    CharacterClass.POWER_FORWARD,
    CharacterClass.GOALIE,
    CharacterClass.STRIKER,
)

_CLASS_THEMES: dict[CharacterClass, ClassTheme] = {
    cls: (
        ClassTheme.FANTASY if cls in _FANTASY
        else ClassTheme.SPORTS if cls in _SPORTS
        else ClassTheme.SCIFI
    )
    for cls in CharacterClass
}

_DISPLAY_NAMES: dict[CharacterClass, str] = {
    CharacterClass.ZERO_G_RANGER: "Zero-G Ranger",
}

# Theme unlock thresholds
THEME_UNLOCK_XP: dict[ClassTheme, float] = {
    ClassTheme.FANTASY: 0.0,
    ClassTheme.SPORTS: 0.0,
    ClassTheme.SCIFI: 60000.0,
}

THEME_UNLOCK_LEVEL: dict[ClassTheme, int | None] = {
    ClassTheme.FANTASY: None,
    ClassTheme.SPORTS: 5,
    ClassTheme.SCIFI: 15,
}


def is_theme_unlocked(theme: ClassTheme, level: int, total_xp: float) -> bool:
    """Whether a theme's classes are selectable.

    Themes with a level requirement unlock on level alone; the XP threshold
    only applies to themes without one.
    """
    required_level = THEME_UNLOCK_LEVEL[theme]
    if required_level is not None:
        return level >= required_level
    return total_xp >= THEME_UNLOCK_XP[theme]


def classes_for_theme(theme: ClassTheme) -> tuple[CharacterClass, ...]:
    return tuple(cls for cls in CharacterClass if cls.theme == theme)
