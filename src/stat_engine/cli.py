"""Command-line stats report for a stored workout history.

Usage:
    stat-engine --history workouts.json
    stat-engine --history workouts.json --recovery recovery.json --class wizard
    stat-engine --history workouts.json --now 2026-03-01T20:00:00 --achievements
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from stat_engine import config
from stat_engine.achievements import evaluate_achievements
from stat_engine.engine import StatEngine
from stat_engine.exceptions import SerializationError, StatEngineError
from stat_engine.models.character_class import CharacterClass
from stat_engine.models.recovery import RecoveryMetrics
from stat_engine.serialization import (
    recovery_from_dict,
    stats_to_dict,
    streak_to_dict,
    workouts_from_json,
)
from stat_engine.serialization.records import parse_timestamp

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stat-engine",
        description="Compute character stats, level, HP and streaks from a workout history.",
    )
    parser.add_argument(
        "--history", type=Path, default=config.HISTORY_PATH,
        help="JSON list of workout documents (default: %(default)s)",
    )
    parser.add_argument(
        "--recovery", type=Path, default=config.RECOVERY_PATH,
        help="JSON recovery metrics document",
    )
    parser.add_argument(
        "--class", dest="character_class", default=config.CHARACTER_CLASS,
        help="Character class name (default: balanced weights)",
    )
    parser.add_argument("--now", help="Fix the current time (ISO 8601)")
    parser.add_argument(
        "--achievements", action="store_true",
        help="Also list achievements met by the history",
    )
    parser.add_argument(
        "--lenient", action="store_true",
        help="Skip malformed workouts instead of failing",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser


def _load_recovery(path: Optional[Path]) -> Optional[RecoveryMetrics]:
    if path is None:
        return None
    with open(path) as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as exc:
            raise SerializationError(f"Invalid recovery JSON in {path}: {exc}") from exc
    if not isinstance(doc, dict):
        raise SerializationError(f"Recovery document in {path} must be a JSON object")
    return recovery_from_dict(doc)


def run(args: argparse.Namespace) -> dict:
    """Compute the report for parsed arguments and return it as a dict."""
    with open(args.history) as f:
        workouts = workouts_from_json(f.read(), lenient=args.lenient)
    logger.info("Loaded %d workouts from %s", len(workouts), args.history)

    recovery = _load_recovery(args.recovery)
    character_class = (
        CharacterClass.from_name(args.character_class) if args.character_class else None
    )

    if args.now:
        today = parse_timestamp(args.now)
    elif any(w.is_timezone_aware for w in workouts):
        today = datetime.now().astimezone()
    else:
        today = datetime.now()
    engine = StatEngine(clock=lambda: today)

    streak = engine.calculate_streak(workouts, now=today)
    stats = engine.calculate_stats(
        workouts,
        recovery=recovery,
        character_class=character_class,
        current_streak=streak.current,
        now=today,
    )
    logger.info("Level %d, overall %.1f, streak %d", stats.level, stats.overall, streak.current)

    report: dict = {"stats": stats_to_dict(stats), "streak": streak_to_dict(streak)}
    if args.achievements:
        report["achievements"] = [
            a.value for a in evaluate_achievements(workouts, streak, today)
        ]
    return report


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        report = run(args)
    except FileNotFoundError as exc:
        logger.error("File not found: %s", exc.filename)
        return 1
    except StatEngineError as exc:
        logger.error("Could not compute stats: %s", exc)
        return 1

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
