"""Document codecs for engine inputs and outputs.

Documents use the camelCase keys the app stores workouts, recovery
snapshots and user stats under. Timestamps are ISO 8601 strings (a trailing
``Z`` is accepted) or epoch seconds.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from stat_engine.exceptions import SerializationError
from stat_engine.models.enums import WorkoutType
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.models.user_stats import StreakResult, UserStats
from stat_engine.models.workout import Workout

logger = logging.getLogger(__name__)

# Workout field → document key
_WORKOUT_OPTIONAL_KEYS = {
    "energy_burned_kcal": "energyBurned",
    "distance_meters": "distance",
    "average_heart_rate_bpm": "averageHeartRate",
    "estimated_heart_rate_bpm": "estimatedHeartRate",
    "strength_weight_kg": "strengthWeightKg",
}

_RECOVERY_KEYS = {
    "sleep_minutes_7d": "sleepMinutes7d",
    "mindful_minutes_7d": "mindfulMinutes7d",
    "hrv_sdnn_ms": "hrvSDNN",
    "resting_heart_rate_bpm": "restingHeartRate",
    "heart_rate_recovery_1min_bpm": "heartRateRecovery1Min",
}

_STATS_KEYS = {
    "strength": "strength",
    "speed": "speed",
    "endurance": "endurance",
    "intelligence": "intelligence",
    "level": "level",
    "xp_current": "xpCurrent",
    "xp_to_next": "xpToNext",
    "total_xp": "totalXP",
    "hp_current": "hpCurrent",
    "hp_max": "hpMax",
    "xp_multiplier": "xpMultiplier",
}


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 string or epoch seconds into a datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise SerializationError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as exc:
            raise SerializationError(f"Invalid timestamp: {value!r}") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise SerializationError(f"Invalid timestamp: {value!r}") from exc
    raise SerializationError(f"Invalid timestamp: {value!r}")


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise SerializationError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise SerializationError(f"{key} must be an integer, got {value!r}")


def _optional_float(doc: dict[str, Any], key: str) -> Optional[float]:
    value = doc.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SerializationError(f"{key} must be a number, got {value!r}")
    return float(value)


# ---------------------------------------------------------------------------
# Workout
# ---------------------------------------------------------------------------


def workout_from_dict(doc: dict[str, Any]) -> Workout:
    """Build a Workout from a stored workout document.

    Raises:
        SerializationError: a required key is missing or malformed.
        ValidationError: the values are well-formed but out of range.
    """
    try:
        raw_type = doc["type"]
        duration = doc["duration"]
        intensity = doc["intensity"]
        created_at = doc["createdAt"]
    except KeyError as exc:
        raise SerializationError(f"Workout document missing key {exc.args[0]!r}") from exc

    try:
        workout_type = WorkoutType(raw_type)
    except ValueError as exc:
        raise SerializationError(f"Unknown workout type: {raw_type!r}") from exc

    reps = doc.get("strengthReps")
    return Workout(
        workout_type=workout_type,
        duration_minutes=_as_int("duration", duration),
        intensity=_as_int("intensity", intensity),
        created_at=parse_timestamp(created_at),
        strength_reps=None if reps is None else _as_int("strengthReps", reps),
        **{field: _optional_float(doc, key) for field, key in _WORKOUT_OPTIONAL_KEYS.items()},
    )


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    """Convert a Workout to a document, omitting absent measurements."""
    doc: dict[str, Any] = {
        "type": workout.workout_type.value,
        "duration": workout.duration_minutes,
        "intensity": workout.intensity,
        "createdAt": format_timestamp(workout.created_at),
    }
    for field, key in _WORKOUT_OPTIONAL_KEYS.items():
        value = getattr(workout, field)
        if value is not None:
            doc[key] = value
    if workout.strength_reps is not None:
        doc["strengthReps"] = workout.strength_reps
    return doc


def workouts_from_list(
    docs: list[dict[str, Any]], lenient: bool = False
) -> list[Workout]:
    """Convert a list of workout documents.

    With ``lenient`` set, malformed documents are logged and skipped instead
    of failing the whole history.
    """
    if not isinstance(docs, list):
        raise SerializationError("Workout history must be a JSON list")

    workouts: list[Workout] = []
    for index, doc in enumerate(docs):
        if not isinstance(doc, dict):
            if not lenient:
                raise SerializationError(f"Workout #{index} is not an object")
            logger.warning("Skipping workout #%d: not an object", index)
            continue
        try:
            workouts.append(workout_from_dict(doc))
        except (SerializationError, ValueError) as exc:
            if not lenient:
                raise
            logger.warning("Skipping workout #%d: %s", index, exc)
    return workouts


def workouts_from_json(text: str, lenient: bool = False) -> list[Workout]:
    try:
        docs = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid workout history JSON: {exc}") from exc
    return workouts_from_list(docs, lenient=lenient)


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------


def recovery_from_dict(doc: dict[str, Any]) -> RecoveryMetrics:
    captured = doc.get("capturedAt")
    return RecoveryMetrics(
        captured_at=None if captured is None else parse_timestamp(captured),
        **{field: _optional_float(doc, key) for field, key in _RECOVERY_KEYS.items()},
    )


def recovery_to_dict(recovery: RecoveryMetrics) -> dict[str, Any]:
    doc: dict[str, Any] = {}
    for field, key in _RECOVERY_KEYS.items():
        value = getattr(recovery, field)
        if value is not None:
            doc[key] = value
    if recovery.captured_at is not None:
        doc["capturedAt"] = format_timestamp(recovery.captured_at)
    return doc


# ---------------------------------------------------------------------------
# Stats & streaks
# ---------------------------------------------------------------------------


def stats_to_dict(stats: UserStats) -> dict[str, Any]:
    return {key: getattr(stats, field) for field, key in _STATS_KEYS.items()}


def stats_from_dict(doc: dict[str, Any]) -> UserStats:
    """Build UserStats from a stored document; missing keys take the defaults."""
    defaults = UserStats()
    values: dict[str, Any] = {}
    for field, key in _STATS_KEYS.items():
        value = doc.get(key)
        if value is None:
            values[field] = getattr(defaults, field)
        elif field == "level":
            values[field] = _as_int(key, value)
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SerializationError(f"{key} must be a number, got {value!r}")
        else:
            values[field] = float(value)
    return UserStats(**values)


def streak_to_dict(streak: StreakResult) -> dict[str, Any]:
    return {"currentStreak": streak.current, "longestStreak": streak.longest}


def streak_from_dict(doc: dict[str, Any]) -> StreakResult:
    return StreakResult(
        current=_as_int("currentStreak", doc.get("currentStreak", 0)),
        longest=_as_int("longestStreak", doc.get("longestStreak", 0)),
    )


def stats_to_json_string(stats: UserStats, indent: int = 2) -> str:
    return json.dumps(stats_to_dict(stats), indent=indent)
