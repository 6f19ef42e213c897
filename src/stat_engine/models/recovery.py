"""Recovery metrics — optional physiological readiness signals."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import datetime

from stat_engine.exceptions import ValidationError


@dataclass(frozen=True)
class RecoveryMetrics:
    """Snapshot of recovery signals over the trailing week.

    Every field is independently optional. ``None`` means the source had no
    reading, which is not the same as a reading of zero: absent signals are
    skipped by the recovery formulas instead of scoring as poor recovery.
    """

    sleep_minutes_7d: float | None = None  # Average nightly sleep
    mindful_minutes_7d: float | None = None
    hrv_sdnn_ms: float | None = None
    resting_heart_rate_bpm: float | None = None
    heart_rate_recovery_1min_bpm: float | None = None
    captured_at: datetime | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.name == "captured_at":
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"{f.name} must be a number, got {value!r}", field=f.name)
            if not math.isfinite(value) or value < 0:
                raise ValidationError(
                    f"{f.name} must be finite and >= 0, got {value!r}", field=f.name
                )
        if self.captured_at is not None and not isinstance(self.captured_at, datetime):
            raise ValidationError(
                f"captured_at must be a datetime, got {self.captured_at!r}",
                field="captured_at",
            )

    def has_signal(self) -> bool:
        """True if at least one physiological reading is present."""
        return any(
            value is not None
            for value in (
                self.sleep_minutes_7d,
                self.mindful_minutes_7d,
                self.hrv_sdnn_ms,
                self.resting_heart_rate_bpm,
                self.heart_rate_recovery_1min_bpm,
            )
        )
