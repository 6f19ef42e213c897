"""Environment-variable-based configuration for the stat-engine CLI."""

from __future__ import annotations

import os
from pathlib import Path

HISTORY_PATH: Path = Path(os.environ.get("STAT_ENGINE_HISTORY", "workouts.json")).expanduser()
RECOVERY_PATH: Path | None = (
    Path(os.environ["STAT_ENGINE_RECOVERY"]).expanduser()
    if os.environ.get("STAT_ENGINE_RECOVERY")
    else None
)
CHARACTER_CLASS: str = os.environ.get("STAT_ENGINE_CLASS", "")
LOG_LEVEL: str = os.environ.get("STAT_ENGINE_LOG_LEVEL", "INFO").upper()
