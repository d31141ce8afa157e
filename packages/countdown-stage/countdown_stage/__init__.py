"""countdown-stage - Threshold-driven stage lookup for time-proportional effects."""
from __future__ import annotations

from countdown_stage.scheduler import StageScheduler
from countdown_stage.thresholds import parse_threshold
from countdown_stage.types import (
    InvalidPercentageError,
    InvalidSecondsError,
    InvalidThresholdFormatError,
    NoStagesError,
    ResolvedStage,
    StageDefinition,
    StageOrderError,
    StageSnapshot,
    ThresholdError,
)

__all__ = [
    "StageScheduler",
    "StageDefinition",
    "StageSnapshot",
    "ResolvedStage",
    "parse_threshold",
    "ThresholdError",
    "InvalidPercentageError",
    "InvalidSecondsError",
    "InvalidThresholdFormatError",
    "StageOrderError",
    "NoStagesError",
]
