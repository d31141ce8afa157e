"""TimeLoop - periodic remaining-time ticks, pause/resume and completion."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from countdown.clock import AsyncioClock, Clock
from countdown.config import DEFAULT_CONFIG, CountdownConfig
from countdown.time import get_time_remaining, time_remaining_from_ms
from countdown.types import TickCallback, TimeRemaining, TimerHandle

logger = logging.getLogger(__name__)


class TimeLoop:
    """Recomputes remaining time from a target provider on a fixed cadence.

    ``get_target_date`` is called on every tick, so the caller can retarget
    the countdown without rebuilding the loop. Completion is owned by the
    ``is_complete`` predicate: once it reports true, ticks stop emitting.
    Within one cycle at most one of ``on_tick``/``on_complete`` fires.
    """

    def __init__(
        self,
        get_target_date: Callable[[], datetime],
        on_tick: TickCallback,
        on_complete: Callable[[], None],
        is_complete: Callable[[], bool],
        tick_interval_ms: int | None = None,
        clock: Clock | None = None,
        config: CountdownConfig = DEFAULT_CONFIG,
    ) -> None:
        if tick_interval_ms is None:
            tick_interval_ms = config.tick_interval_ms
        if tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")
        self._get_target_date = get_target_date
        self._on_tick = on_tick
        self._on_complete = on_complete
        self._is_complete = is_complete
        self._interval = tick_interval_ms
        self._clock: Clock = clock if clock is not None else AsyncioClock()
        self._handle: TimerHandle | None = None
        self._last_time: TimeRemaining | None = None
        self._paused = False
        self._paused_remaining_ms: int | None = None

    @property
    def tick_interval_ms(self) -> int:
        return self._interval

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def last_time(self) -> TimeRemaining | None:
        return self._last_time

    @property
    def paused_remaining_ms(self) -> int | None:
        """Remaining ms captured by the last ``pause()``; None if never paused."""
        return self._paused_remaining_ms

    def get_last_time(self) -> TimeRemaining | None:
        return self._last_time

    def is_running(self) -> bool:
        return self._handle is not None

    def is_paused(self) -> bool:
        return self._paused

    def _schedule(self) -> None:
        if self._handle is None:
            self._handle = self._clock.call_every(self._interval, self._process_tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _compute(self) -> TimeRemaining:
        return get_time_remaining(self._get_target_date(), self._clock.now_ms())

    def _process_tick(self) -> None:
        if self._paused or self._is_complete():
            return

        time = self._compute()
        self._last_time = time

        if time.total <= 0 and not self._is_complete():
            logger.debug("countdown reached zero")
            self._on_complete()
            return

        self._on_tick(time)

    def start(self) -> None:
        if self._handle is not None:
            return
        logger.debug("starting time loop (interval=%dms)", self._interval)
        self._process_tick()
        self._schedule()

    def stop(self) -> None:
        if self._handle is not None:
            logger.debug("stopping time loop")
        self._cancel()

    def tick(self) -> None:
        self._process_tick()

    def pause(self) -> None:
        if self._paused or self._handle is None or self._is_complete():
            return
        self._paused_remaining_ms = self._compute().total
        self._paused = True
        self._cancel()
        logger.debug("paused with %dms remaining", self._paused_remaining_ms)

    def resume(self) -> None:
        """Leave the paused state and tick immediately.

        The caller retargets ``get_target_date`` from ``paused_remaining_ms``
        before resuming; the loop itself never stores a target.
        """
        if not self._paused:
            return
        self._paused = False
        logger.debug("resuming time loop")
        self._process_tick()
        self._schedule()

    def set_paused_remaining_ms(self, ms: int) -> None:
        if self._paused:
            self._paused_remaining_ms = ms

    def force_update(self) -> None:
        """Emit one tick now regardless of pause state.

        While paused the value comes from the captured remaining duration so
        the display does not drift.
        """
        if self._paused and self._paused_remaining_ms is not None:
            time = time_remaining_from_ms(self._paused_remaining_ms)
        else:
            time = self._compute()
        self._last_time = time
        self._on_tick(time)
