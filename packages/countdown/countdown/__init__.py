"""countdown - Shared types, host clocks and time arithmetic for the countdown core."""

from countdown.clock import AsyncioClock, Clock, ManualClock
from countdown.config import DEFAULT_CONFIG, CountdownConfig
from countdown.time import from_epoch_ms, get_time_remaining, to_epoch_ms
from countdown.types import (
    ZERO_TIME,
    CelebrationState,
    CountdownMode,
    TimeRemaining,
    TimerHandle,
    WallClockTime,
)

__all__ = [
    "AsyncioClock",
    "Clock",
    "ManualClock",
    "CountdownConfig",
    "DEFAULT_CONFIG",
    "TimeRemaining",
    "WallClockTime",
    "CelebrationState",
    "CountdownMode",
    "TimerHandle",
    "ZERO_TIME",
    "get_time_remaining",
    "to_epoch_ms",
    "from_epoch_ms",
]
