"""Host clocks: wall time plus periodic callbacks."""

from __future__ import annotations

import asyncio
import heapq
import itertools
import time
from typing import Callable, Protocol, runtime_checkable

from countdown.types import TimerHandle


@runtime_checkable
class Clock(Protocol):
    """What a tick loop needs from its host: the time, and a repeating timer."""

    def now_ms(self) -> int:
        """Current wall time in epoch milliseconds."""
        ...

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` every ``interval_ms`` until the handle is cancelled."""
        ...


def _check_interval(interval_ms: int) -> None:
    if interval_ms <= 0:
        raise ValueError("interval_ms must be positive")


class _AsyncioInterval:
    __slots__ = ("_loop", "_interval", "_callback", "_due", "_handle", "_cancelled")

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval_ms: int,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval_ms / 1000.0
        self._callback = callback
        self._due = loop.time() + self._interval
        self._cancelled = False
        self._handle = loop.call_at(self._due, self._fire)

    def _fire(self) -> None:
        # Due times stay on the fixed cadence regardless of callback duration.
        self._due += self._interval
        now = self._loop.time()
        if self._due <= now:
            self._due = now + self._interval
        self._handle = self._loop.call_at(self._due, self._fire)
        self._callback()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioClock:
    """Production clock backed by ``time.time()`` and the running event loop.

    ``call_every`` must be invoked from inside a running loop unless a loop
    was passed explicitly.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> _AsyncioInterval:
        _check_interval(interval_ms)
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return _AsyncioInterval(loop, interval_ms, callback)


class _ManualInterval:
    __slots__ = ("interval", "callback", "cancelled")

    def __init__(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval = interval_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Deterministic virtual clock. Time only moves when ``advance`` is called.

    Periodic callbacks fire at their exact due times, in due-time order, with
    ``now_ms()`` reporting the due time while each callback runs.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms
        self._queue: list[tuple[int, int, _ManualInterval]] = []
        self._seq = itertools.count()

    def now_ms(self) -> int:
        return self._now

    def set_time(self, ms: int) -> None:
        """Jump the clock without firing anything (e.g. a wall-clock change)."""
        self._now = ms

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> _ManualInterval:
        _check_interval(interval_ms)
        entry = _ManualInterval(interval_ms, callback)
        heapq.heappush(self._queue, (self._now + interval_ms, next(self._seq), entry))
        return entry

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("cannot advance a clock backwards")
        deadline = self._now + ms
        while self._queue and self._queue[0][0] <= deadline:
            due, _, entry = heapq.heappop(self._queue)
            if entry.cancelled:
                continue
            self._now = due
            heapq.heappush(self._queue, (due + entry.interval, next(self._seq), entry))
            entry.callback()
        self._now = deadline

    @property
    def pending(self) -> int:
        """Number of live periodic timers."""
        return sum(1 for _, _, entry in self._queue if not entry.cancelled)
