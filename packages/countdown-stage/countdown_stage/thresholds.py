"""Threshold expression parsing."""
from __future__ import annotations

import math

from countdown_stage.types import (
    InvalidPercentageError,
    InvalidSecondsError,
    InvalidThresholdFormatError,
)


def _number(text: str, threshold: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise InvalidThresholdFormatError(
            threshold, f"Invalid threshold format: {threshold!r}. Expected 'N%' or 'Ns'."
        ) from None
    if not math.isfinite(value):
        raise InvalidThresholdFormatError(
            threshold, f"Invalid threshold format: {threshold!r}. Expected 'N%' or 'Ns'."
        )
    return value


def parse_threshold(threshold: str, duration_ms: float) -> float:
    """Milliseconds remaining at which ``threshold`` triggers.

    ``"50%"`` -> half of ``duration_ms``; ``"60s"`` -> 60000 regardless of
    duration. Fractional values are accepted.
    """
    expr = threshold.strip()
    if expr.endswith("%"):
        percent = _number(expr[:-1], threshold)
        if percent < 0 or percent > 100:
            raise InvalidPercentageError(
                threshold, f"Invalid percentage threshold: {threshold!r} (expected 0-100)"
            )
        return percent / 100 * duration_ms
    if expr.endswith("s"):
        seconds = _number(expr[:-1], threshold)
        if seconds < 0:
            raise InvalidSecondsError(threshold, f"Invalid seconds threshold: {threshold!r}")
        return seconds * 1000
    raise InvalidThresholdFormatError(
        threshold, f"Invalid threshold format: {threshold!r}. Expected 'N%' or 'Ns'."
    )
