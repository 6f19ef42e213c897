"""Consecutive-day workout streaks.

Workouts are collapsed to the distinct calendar days they fall on. The
current streak is anchored at today or yesterday (a streak survives until
the end of the day after the last workout); the longest streak is the
longest run of adjacent days anywhere in the history.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from stat_engine.models.user_stats import StreakResult
from stat_engine.models.workout import Workout

_ONE_DAY = timedelta(days=1)


def calendar_day(timestamp: datetime, now: datetime) -> date:
    """Calendar day of *timestamp* in the caller's local calendar.

    The caller's calendar is whatever ``now`` is expressed in: aware
    timestamps are converted into ``now``'s zone first, naive timestamps
    are taken as already local.
    """
    if timestamp.tzinfo is not None and now.tzinfo is not None:
        return timestamp.astimezone(now.tzinfo).date()
    return timestamp.date()


def workout_days(workouts: Iterable[Workout], now: datetime) -> list[date]:
    """Distinct calendar days with at least one workout, most recent first."""
    return sorted({calendar_day(w.created_at, now) for w in workouts}, reverse=True)


def _current_streak(days_desc: list[date], today: date) -> int:
    first_day = days_desc[0]
    if first_day != today and first_day != today - _ONE_DAY:
        return 0

    streak = 0
    check_day = first_day
    for day in days_desc:
        if day == check_day:
            streak += 1
            check_day -= _ONE_DAY
        elif day < check_day:
            break
    return streak


def _longest_run(days_desc: list[date]) -> int:
    longest = 0
    run = 1
    for newer, older in zip(days_desc, days_desc[1:]):
        if (newer - older).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    return max(longest, run)


def calculate_streak(workouts: Iterable[Workout], now: datetime) -> StreakResult:
    """Calculate current and longest consecutive-day streaks.

    Args:
        workouts: Full workout history, in any order.
        now: The caller's current time; anchors "today".

    Returns:
        StreakResult with ``longest >= current``. Both are 0 for an empty
        history.
    """
    days = workout_days(workouts, now)
    if not days:
        return StreakResult(current=0, longest=0)

    today = now.date()
    current = _current_streak(days, today)
    longest = _longest_run(days)
    return StreakResult(current=current, longest=max(longest, current))
