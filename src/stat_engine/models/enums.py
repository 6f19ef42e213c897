"""Enumerations and scoring constants for the stat engine.

Constants are grouped by the component that consumes them. Values are the
tuning numbers the character-card stats have always been computed with;
changing any of them changes every user's stats.
"""

from enum import Enum, IntEnum, auto


class WorkoutType(str, Enum):
    """Closed set of workout types a user can log."""

    STRENGTH = "strength"
    RUNNING = "running"
    CYCLING = "cycling"
    YOGA = "yoga"
    HIIT = "hiit"
    SWIMMING = "swimming"
    STRETCHING = "stretching"
    MEDITATION = "meditation"
    WALKING = "walking"
    OTHER = "other"


class XPCategory(IntEnum):
    """Which scoring formula a workout is valued with."""

    ENDURANCE = auto()
    SPEED = auto()
    STRENGTH = auto()
    RECOVERY = auto()


class StatChannel(str, Enum):
    """The four character stats. Intelligence is shown as "Mobility" on cards."""

    STRENGTH = "strength"
    SPEED = "speed"
    ENDURANCE = "endurance"
    INTELLIGENCE = "intelligence"


# Canonical channel order for every 4-vector in the engine
STAT_CHANNELS: tuple[StatChannel, ...] = (
    StatChannel.STRENGTH,
    StatChannel.SPEED,
    StatChannel.ENDURANCE,
    StatChannel.INTELLIGENCE,
)


class ClassTheme(str, Enum):
    """Character class families; sci-fi classes unlock with XP."""

    FANTASY = "fantasy"
    SPORTS = "sports"
    SCIFI = "scifi"


class AchievementType(str, Enum):
    """Every achievement badge, keyed by its stored identifier."""

    # Basics
    FIRST_BLOOD = "first_blood"
    IRON_WILL = "iron_will"
    RENAISSANCE_MAN = "renaissance_man"
    BEAST_MODE = "beast_mode"
    ZEN_MASTER = "zen_master"
    ACCOUNTABILITY_PARTNER = "accountability_partner"
    DADDY_OF_THE_MONTH = "daddy_of_the_month"
    # Class & theme exploration
    IDENTITY_CRISIS = "identity_crisis"
    TRIPLE_THREAT = "triple_threat"
    SPORTS_LEGEND = "sports_legend"
    FANTASY_HERO = "fantasy_hero"
    SCIFI_COMMANDER = "scifi_commander"
    LOYAL_TO_THE_END = "loyal_to_the_end"
    # Consistency
    GETTING_SERIOUS = "getting_serious"
    UNSTOPPABLE = "unstoppable"
    LEGENDARY_DISCIPLINE = "legendary_discipline"
    # Workout mastery
    MASTER_OF_ALL = "master_of_all"
    DISTANCE_DEMON = "distance_demon"
    TIME_LORD = "time_lord"
    POWER_HOUSE = "power_house"
    CARDIO_KING = "cardio_king"
    # Social
    SOCIAL_BUTTERFLY = "social_butterfly"
    SUPER_MOTIVATOR = "super_motivator"
    BELT_MASTER = "belt_master"
    CHALLENGE_CHAMPION = "challenge_champion"
    SQUAD_GOALS = "squad_goals"
    # App engagement
    EARLY_RISER = "early_riser"
    NIGHT_WARRIOR = "night_warrior"
    CONSISTENT_USER = "consistent_user"


# ---------------------------------------------------------------------------
# Workout scoring
# ---------------------------------------------------------------------------
MIN_SCORED_MINUTES = 1.0  # Floor so zero-minute workouts never divide by zero

# Energy estimate when no kcal reading: (4.0 + intensity * 2.5) kcal/min
ENERGY_BASE_KCAL_PER_MIN = 4.0
ENERGY_KCAL_PER_MIN_PER_INTENSITY = 2.5

# Distance estimate in metres per minute when no distance reading
ESTIMATED_METERS_PER_MIN = {
    WorkoutType.RUNNING: 150.0,  # ~9 km/h
    WorkoutType.CYCLING: 350.0,  # ~21 km/h
    WorkoutType.WALKING: 80.0,   # ~4.8 km/h
}

METERS_PER_MILE = 1609.34
DEFAULT_HEART_RATE_BPM = 130.0
RPE_PER_INTENSITY = 2.0
RPE_MIN = 1.0
RPE_MAX = 10.0
SPEED_CATEGORY_MIN_INTENSITY = 4  # Cardio at this intensity or above scores as SPEED

ENDURANCE_XP_PER_KCAL = 1.0
SPEED_REFERENCE_MPH = 7.5
SPEED_XP_PER_MIN = 10.0
STRENGTH_REFERENCE_HR_BPM = 140.0
STRENGTH_XP_PER_MIN = 14.0
RECOVERY_XP_PER_MIN = 4.0

# ---------------------------------------------------------------------------
# Stat aggregation
# ---------------------------------------------------------------------------
STAT_WINDOW_DAYS = 30
CLASS_MODIFIER_BASE = 0.85
CLASS_MODIFIER_SCALE = 0.6

# Log-curve normalisation: 1000 points maps to the stat cap
STAT_CAP = 99.0
STAT_NORMALIZATION_POINTS = 1000.0

CONSISTENCY_WEEKS = 4
CONSISTENCY_TOP_BONUS = 60.0   # avg 4-6 workout days/week
CONSISTENCY_MID_BONUS = 40.0   # avg 3-7 workout days/week
CONSISTENCY_LOW_BONUS = 20.0   # avg >= 2 workout days/week
CONSISTENCY_POINTS_PER_DAY = 10.0

VARIETY_FULL_TYPE_COUNT = 6
VARIETY_MAX_BONUS = 40.0

# Recovery signal shaping, shared by the intelligence bonus and HP
SLEEP_TARGET_HOURS = 8.0
SLEEP_TOLERANCE_HOURS = 3.5
MINDFUL_TARGET_MINUTES = 25.0
HRV_FLOOR_MS = 25.0
HRV_RANGE_MS = 75.0
RESTING_HR_CEILING_BPM = 90.0
RESTING_HR_RANGE_BPM = 45.0
HRR_FLOOR_BPM = 10.0
HRR_RANGE_BPM = 35.0

# Intelligence points per fully satisfied recovery signal
RECOVERY_BONUS_WEIGHTS = {
    "sleep": 70.0,
    "mindful": 10.0,
    "hrv": 15.0,
    "resting_hr": 15.0,
    "hrr": 10.0,
}

# ---------------------------------------------------------------------------
# Leveling
# ---------------------------------------------------------------------------
BASE_LEVEL_XP = 100.0
LEVEL_XP_GROWTH = 1.15
MAX_LEVEL = 99

STREAK_BOOST_PER_DAY = 0.01
MAX_STREAK_BOOST = 0.25

# ---------------------------------------------------------------------------
# Health (HP)
# ---------------------------------------------------------------------------
HEALTH_WINDOW_DAYS = 7
HP_MAX = 100.0
HP_LOAD_NORMALIZATION = 2000.0
NOVICE_LEVEL_SPAN = 24.0  # Cushion fades out between level 1 and level 25

HP_BASELINE = 55.0
HP_BASELINE_NOVICE = 5.0
HP_LOAD_PENALTY = 40.0
HP_LOAD_PENALTY_NOVICE_RELIEF = 12.0
HP_RECOVERY_BONUS = 35.0
HP_RECOVERY_BONUS_NOVICE = 6.0
HP_FLOOR = 10.0
HP_FLOOR_NOVICE = 5.0

DEFAULT_RECOVERY_SCORE = 0.5
MIN_RECOVERY_SCORE = 0.2
MAX_RECOVERY_SCORE = 1.0
MINDFUL_RECOVERY_SCALE = 0.5  # Mindful minutes count half toward HP recovery
