"""Stage definitions, snapshots and configuration errors."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class StageDefinition(Generic[V]):
    """A named stage. Not mutated by the scheduler.

    ``at`` is either a percentage of the total duration (``"50%"``) or an
    absolute number of seconds remaining (``"60s"``).
    """

    name: str
    at: str
    values: V


@dataclass(frozen=True)
class StageSnapshot(Generic[V]):
    """Resolved stage for one query. Cached, so compare by identity to skip redraws."""

    name: str
    values: V
    stage_index: int
    progress: float


@dataclass(frozen=True)
class ResolvedStage(Generic[V]):
    name: str
    values: V
    threshold_ms: float


class ThresholdError(ValueError):
    """Raised for a stage threshold expression that cannot be used."""

    def __init__(self, threshold: str, message: str) -> None:
        self.threshold = threshold
        super().__init__(message)


class InvalidPercentageError(ThresholdError):
    """Percentage outside 0-100."""


class InvalidSecondsError(ThresholdError):
    """Negative seconds count."""


class InvalidThresholdFormatError(ThresholdError):
    """Neither ``N%`` nor ``Ns``."""


class StageOrderError(ValueError):
    """Raised when resolved thresholds are not in descending order."""


class NoStagesError(ValueError):
    """Raised when a scheduler is built from an empty stage list."""
