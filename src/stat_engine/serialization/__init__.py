"""Serialization module — convert engine models to and from stored documents."""

from stat_engine.serialization.records import (
    recovery_from_dict,
    recovery_to_dict,
    stats_from_dict,
    stats_to_dict,
    stats_to_json_string,
    streak_from_dict,
    streak_to_dict,
    workout_from_dict,
    workout_to_dict,
    workouts_from_json,
    workouts_from_list,
)

__all__ = [
    "recovery_from_dict",
    "recovery_to_dict",
    "stats_from_dict",
    "stats_to_dict",
    "stats_to_json_string",
    "streak_from_dict",
    "streak_to_dict",
    "workout_from_dict",
    "workout_to_dict",
    "workouts_from_json",
    "workouts_from_list",
]
