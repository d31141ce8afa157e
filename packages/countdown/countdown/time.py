"""Remaining-time arithmetic and formatting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from countdown.types import ZERO_TIME, TimeRemaining

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def to_epoch_ms(instant: datetime) -> int:
    """Aware datetime to epoch milliseconds. Naive values are read as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return (instant - EPOCH) // _ONE_MS


def from_epoch_ms(ms: int) -> datetime:
    return EPOCH + timedelta(milliseconds=ms)


def extract_time_units(ms: float) -> tuple[int, int, int, int]:
    """Split a duration into (days, hours, minutes, seconds), flooring to seconds."""
    total_seconds = max(0, int(ms // 1000))
    return (
        total_seconds // 86400,
        (total_seconds % 86400) // 3600,
        (total_seconds % 3600) // 60,
        total_seconds % 60,
    )


def time_remaining_from_ms(total_ms: int) -> TimeRemaining:
    if total_ms <= 0:
        return ZERO_TIME
    days, hours, minutes, seconds = extract_time_units(total_ms)
    return TimeRemaining(days=days, hours=hours, minutes=minutes, seconds=seconds, total=total_ms)


def get_time_remaining(target: datetime, now_ms: int) -> TimeRemaining:
    """Time left until ``target`` as seen at ``now_ms``. Clamped to zero."""
    return time_remaining_from_ms(to_epoch_ms(target) - now_ms)


def pluralize(value: int, singular: str) -> str:
    return f"{value} {singular}{'' if value == 1 else 's'}"


def format_countdown(ms: float) -> str:
    """``DD:HH:MM:SS``; all zeros once the target has passed."""
    days, hours, minutes, seconds = extract_time_units(ms)
    return f"{days:02d}:{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_time_remaining_human(time: TimeRemaining) -> str:
    parts: list[str] = []
    if time.days > 0:
        parts.append(pluralize(time.days, "day"))
    if time.hours > 0:
        parts.append(pluralize(time.hours, "hour"))
    if time.minutes > 0:
        parts.append(pluralize(time.minutes, "minute"))
    parts.append(pluralize(time.seconds, "second"))
    return ", ".join(parts)


def format_time_remaining_human_without_seconds(time: TimeRemaining) -> str:
    """Like ``format_time_remaining_human`` but minute-granular, for labels
    that should not change every second."""
    parts: list[str] = []
    if time.days > 0:
        parts.append(pluralize(time.days, "day"))
    if time.hours > 0:
        parts.append(pluralize(time.hours, "hour"))
    if time.minutes > 0:
        parts.append(pluralize(time.minutes, "minute"))
    if not parts:
        return "less than 1 minute"
    return ", ".join(parts)
