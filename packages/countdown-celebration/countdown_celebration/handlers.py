"""Tick, completion and timezone-switch handling for one countdown view.

These are the call sites of the transitions: they decide which transition
applies, run it, and then notify the presentation and accessibility
collaborators.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Protocol, runtime_checkable

from countdown.clock import Clock
from countdown.config import DEFAULT_CONFIG
from countdown.time import format_time_remaining_human_without_seconds, from_epoch_ms
from countdown.types import CelebrationState, CountdownMode, TimeRemaining, WallClockTime
from countdown_wallclock import (
    convert_wall_clock_to_absolute,
    ensure_valid_timezone,
    has_wall_clock_time_reached,
)

from countdown_celebration.store import (
    CelebrationReader,
    CelebrationStateManager,
    ViewState,
)
from countdown_celebration.transitions import (
    complete_celebration,
    transition_to_celebrated,
    transition_to_celebrating,
    transition_to_counting,
)

logger = logging.getLogger(__name__)

COMPLETED_LABEL = "The countdown has completed."


@runtime_checkable
class Presentation(Protocol):
    """Theme hooks. ``on_counting`` is optional and looked up by name."""

    def on_celebrating(self, message: str) -> None: ...

    def on_celebrated(self, message: str) -> None: ...

    def update_time(self, time: TimeRemaining) -> None: ...


@runtime_checkable
class Announcer(Protocol):
    """Accessibility sink. Throttling is the announcer's own business."""

    def announce_countdown(self, time: TimeRemaining) -> None: ...

    def announce_celebration(self) -> None: ...


class ViewStore(CelebrationStateManager, CelebrationReader, Protocol):
    def is_complete(self) -> bool: ...


def countdown_label(time: TimeRemaining | None, complete: bool) -> str:
    """Accessible name for the countdown region."""
    if complete or time is None:
        return COMPLETED_LABEL
    return f"Countdown: {format_time_remaining_human_without_seconds(time)}"


def _call_on_counting(presentation: Presentation | None) -> None:
    hook = getattr(presentation, "on_counting", None)
    if hook is not None:
        hook()


def apply_initial_state(
    store: ViewStore,
    view: ViewState,
    timezone: str,
    presentation: Presentation | None = None,
    message: str = DEFAULT_CONFIG.completion_message,
) -> None:
    """Show the finished state for a target that was already past on load."""
    had_celebrated = store.has_celebrated(timezone)
    transition_to_celebrated(store, view, timezone)
    view.set_aria_label(COMPLETED_LABEL)
    if not had_celebrated and presentation is not None:
        presentation.on_celebrated(message)


class TimeEventHandlers:
    """``on_tick``/``on_complete`` targets for a TimeLoop."""

    def __init__(
        self,
        store: ViewStore,
        view: ViewState,
        get_timezone: Callable[[], str],
        presentation: Presentation | None = None,
        announcer: Announcer | None = None,
        message: str = DEFAULT_CONFIG.completion_message,
    ) -> None:
        self.store = store
        self.view = view
        self.presentation = presentation
        self.announcer = announcer
        self.message = message
        self._get_timezone = get_timezone

    def handle_tick(self, time: TimeRemaining) -> None:
        state = self.store.get_celebration_state()
        if state is CelebrationState.COUNTING and self.presentation is not None:
            self.presentation.update_time(time)
        self.view.set_aria_label(countdown_label(time, state is not CelebrationState.COUNTING))
        if self.announcer is not None:
            self.announcer.announce_countdown(time)

    def handle_complete(self) -> None:
        timezone = self._get_timezone()
        self.view.set_aria_label(COMPLETED_LABEL)

        if self.store.has_celebrated(timezone):
            transition_to_celebrated(self.store, self.view, timezone)
            if self.presentation is not None:
                self.presentation.on_celebrated(self.message)
            return

        logger.debug("celebrating in %s", timezone)
        transition_to_celebrating(self.store, self.view, timezone)
        if self.presentation is not None:
            self.presentation.on_celebrating(self.message)
        if self.announcer is not None:
            self.announcer.announce_celebration()
        # Animation length belongs to the presentation; the state moves on now.
        complete_celebration(self.store)


class TimezoneSwitcher:
    """Applies a timezone change to the target and the celebration state.

    Only ``CountdownMode.WALL_CLOCK`` countdowns move their target or
    transition; timer and absolute countdowns just record the new zone.
    """

    def __init__(
        self,
        store: ViewStore,
        view: ViewState,
        initial_timezone: str,
        mode: CountdownMode,
        set_target_date: Callable[[datetime], None],
        wall_clock_target: WallClockTime | None = None,
        presentation: Presentation | None = None,
        message: str = DEFAULT_CONFIG.completion_message,
        clock: Clock | None = None,
        on_update: Callable[[], None] | None = None,
        get_last_time: Callable[[], TimeRemaining | None] | None = None,
    ) -> None:
        if mode is CountdownMode.WALL_CLOCK and wall_clock_target is None:
            raise ValueError("wall-clock mode requires wall_clock_target")
        self.store = store
        self.view = view
        self.mode = mode
        self.presentation = presentation
        self.message = message
        self._timezone = ensure_valid_timezone(initial_timezone)
        self._wall_clock_target = wall_clock_target
        self._set_target_date = set_target_date
        self._clock = clock
        self._on_update = on_update
        self._get_last_time = get_last_time

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def wall_clock_target(self) -> WallClockTime | None:
        return self._wall_clock_target

    def _now(self) -> datetime | None:
        if self._clock is None:
            return None
        return from_epoch_ms(self._clock.now_ms())

    def set_timezone(self, timezone: str) -> None:
        timezone = ensure_valid_timezone(timezone)
        self._timezone = timezone
        logger.debug("timezone switched to %s (%s)", timezone, self.mode.value)

        target = self._wall_clock_target
        if self.mode is CountdownMode.WALL_CLOCK and target is not None:
            self._switch_wall_clock(target, timezone)

        if self._on_update is not None:
            self._on_update()

        if not self.store.is_complete() and self._get_last_time is not None:
            last = self._get_last_time()
            if last is not None:
                self.view.set_aria_label(countdown_label(last, False))

    def _switch_wall_clock(self, target: WallClockTime, timezone: str) -> None:
        self._set_target_date(convert_wall_clock_to_absolute(target, timezone))

        if has_wall_clock_time_reached(target, timezone, self._now()):
            had_celebrated = self.store.has_celebrated(timezone)
            transition_to_celebrated(self.store, self.view, timezone)
            if not had_celebrated and self.presentation is not None:
                self.presentation.on_celebrated(self.message)
            self.view.set_aria_label(COMPLETED_LABEL)
            return

        was_celebrating = self.store.get_celebration_state() is not CelebrationState.COUNTING
        transition_to_counting(self.store, self.view)
        if was_celebrating:
            _call_on_counting(self.presentation)
