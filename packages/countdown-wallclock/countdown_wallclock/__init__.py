"""countdown-wallclock - Wall-clock to absolute instant conversion per timezone."""
from __future__ import annotations

from countdown_wallclock.conversion import (
    UTC,
    convert_wall_clock_to_absolute,
    create_next_occurrence,
    create_wall_clock,
    ensure_valid_timezone,
    extract_wall_clock,
    get_timezone_offset_minutes,
    has_wall_clock_time_reached,
    is_valid_wall_clock_time,
)

__all__ = [
    "UTC",
    "convert_wall_clock_to_absolute",
    "create_next_occurrence",
    "create_wall_clock",
    "ensure_valid_timezone",
    "extract_wall_clock",
    "get_timezone_offset_minutes",
    "has_wall_clock_time_reached",
    "is_valid_wall_clock_time",
]
