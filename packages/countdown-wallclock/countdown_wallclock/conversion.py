"""Wall-clock time to absolute instant, per IANA timezone."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from countdown.types import WallClockTime

logger = logging.getLogger(__name__)

UTC = "UTC"


def ensure_valid_timezone(tz: str | None) -> str:
    """Return ``tz`` if it names a loadable zone, otherwise ``"UTC"``.

    Timezone strings usually come from user-editable URLs, so an unknown or
    malformed identifier degrades instead of raising.
    """
    if not tz:
        return UTC
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("invalid timezone %r, falling back to UTC", tz)
        return UTC
    return tz


def _zone(tz: str) -> ZoneInfo:
    return ZoneInfo(ensure_valid_timezone(tz))


def get_timezone_offset_minutes(tz: str, instant: datetime) -> int:
    """UTC offset of ``tz`` at ``instant``, in minutes east of UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    offset = instant.astimezone(_zone(tz)).utcoffset()
    if offset is None:
        return 0
    return int(offset.total_seconds() // 60)


def _as_if_utc(wall_clock: WallClockTime) -> datetime:
    # Days past the end of the month roll into the next one (Feb 31 -> Mar 3).
    start_of_month = datetime(
        wall_clock.year,
        wall_clock.month + 1,
        1,
        wall_clock.hours,
        wall_clock.minutes,
        wall_clock.seconds,
        tzinfo=timezone.utc,
    )
    return start_of_month + timedelta(days=wall_clock.day - 1)


def convert_wall_clock_to_absolute(wall_clock: WallClockTime, tz: str) -> datetime:
    """The UTC instant at which ``tz``'s local clock shows ``wall_clock``.

    Single pass: the offset is sampled at the as-if-UTC guess, so a target
    within one DST delta of a transition can be off by that delta.
    A day past the end of its month rolls forward into the next month.
    """
    utc_guess = _as_if_utc(wall_clock)
    offset_minutes = get_timezone_offset_minutes(tz, utc_guess)
    return utc_guess - timedelta(minutes=offset_minutes)


def has_wall_clock_time_reached(
    wall_clock: WallClockTime,
    tz: str,
    reference: datetime | None = None,
) -> bool:
    if reference is None:
        reference = datetime.now(timezone.utc)
    elif reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    return reference >= convert_wall_clock_to_absolute(wall_clock, tz)


def extract_wall_clock(instant: datetime, tz: str) -> WallClockTime:
    """Local calendar components of ``instant`` as seen in ``tz``."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    local = instant.astimezone(_zone(tz))
    return WallClockTime(
        year=local.year,
        month=local.month - 1,
        day=local.day,
        hours=local.hour,
        minutes=local.minute,
        seconds=local.second,
    )


def create_wall_clock(
    year: int,
    month: int,
    day: int,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
) -> WallClockTime:
    return WallClockTime(year, month, day, hours, minutes, seconds)


def create_next_occurrence(
    month: int,
    day: int,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
    reference: datetime | None = None,
    tz: str = UTC,
) -> WallClockTime:
    """Next time ``tz``'s calendar shows the given month/day/time.

    Uses this year if that moment is still ahead of ``reference``, otherwise
    next year.
    """
    if reference is None:
        reference = datetime.now(timezone.utc)
    year = extract_wall_clock(reference, tz).year
    candidate = WallClockTime(year, month, day, hours, minutes, seconds)
    if has_wall_clock_time_reached(candidate, tz, reference):
        candidate = WallClockTime(year + 1, month, day, hours, minutes, seconds)
    return candidate


def is_valid_wall_clock_time(wall_clock: WallClockTime) -> bool:
    """Range check on each component.

    Days-per-month is not checked: a day such as February 31 is valid and
    converts as the equivalent date in the following month.
    """
    return (
        1970 <= wall_clock.year <= 9999
        and 0 <= wall_clock.month <= 11
        and 1 <= wall_clock.day <= 31
        and 0 <= wall_clock.hours <= 23
        and 0 <= wall_clock.minutes <= 59
        and 0 <= wall_clock.seconds <= 59
    )
