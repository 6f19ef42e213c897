"""Custom exception hierarchy for the stat engine."""

from __future__ import annotations


class StatEngineError(Exception):
    """Base exception for all stat_engine errors."""


class ValidationError(StatEngineError, ValueError):
    """An input violates the engine's contract (out-of-range or wrong type)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class SerializationError(StatEngineError):
    """A stored document could not be converted to or from a model."""
