"""Shared value types for the countdown core."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True, slots=True)
class TimeRemaining:
    """Remaining time split into calendar units. ``total`` is in milliseconds."""

    days: int
    hours: int
    minutes: int
    seconds: int
    total: int


ZERO_TIME = TimeRemaining(days=0, hours=0, minutes=0, seconds=0, total=0)


@dataclass(frozen=True, slots=True)
class WallClockTime:
    """Calendar moment with no timezone attached.

    ``month`` is zero-based (0 = January). Meaningless until paired with an
    IANA timezone identifier.
    """

    year: int
    month: int
    day: int
    hours: int = 0
    minutes: int = 0
    seconds: int = 0


class CelebrationState(enum.Enum):
    COUNTING = "counting"
    CELEBRATING = "celebrating"
    CELEBRATED = "celebrated"


class CountdownMode(enum.Enum):
    """How the countdown target relates to the selected timezone.

    Only ``WALL_CLOCK`` targets move when the timezone changes.
    """

    WALL_CLOCK = "wall-clock"
    ABSOLUTE = "absolute"
    TIMER = "timer"


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TickCallback = Callable[[TimeRemaining], None]
