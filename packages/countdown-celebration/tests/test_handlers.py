"""Tests for tick/completion handlers and timezone switching."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from countdown import (
    CelebrationState,
    CountdownMode,
    ManualClock,
    TimeRemaining,
    WallClockTime,
    from_epoch_ms,
)
from countdown_celebration import (
    COMPLETED_LABEL,
    CelebrationStore,
    TimeEventHandlers,
    TimezoneSwitcher,
    ViewState,
    apply_initial_state,
    countdown_label,
    transition_to_celebrated,
)
from countdown_loop import TimeLoop
from countdown_wallclock import convert_wall_clock_to_absolute

NEW_YEAR = WallClockTime(year=2026, month=0, day=1)
UTC_MIDNIGHT = 1_767_225_600_000  # 2026-01-01T00:00:00Z
TWO_DAYS = TimeRemaining(days=2, hours=3, minutes=4, seconds=5, total=183_845_000)
FEB_31 = WallClockTime(year=2026, month=1, day=31)
MARCH_4 = 1_772_582_400_000  # 2026-03-04T00:00:00Z


def make_handlers(timezone: str = "UTC"):
    store, view = CelebrationStore(), ViewState()
    presentation, announcer = Mock(), Mock()
    handlers = TimeEventHandlers(
        store, view, lambda: timezone, presentation=presentation, announcer=announcer
    )
    return handlers, store, view, presentation, announcer


class TestCountdownLabel:
    def test_counting_label(self) -> None:
        assert countdown_label(TWO_DAYS, False) == "Countdown: 2 days, 3 hours, 4 minutes"

    def test_under_a_minute(self) -> None:
        time = TimeRemaining(days=0, hours=0, minutes=0, seconds=42, total=42_000)
        assert countdown_label(time, False) == "Countdown: less than 1 minute"

    def test_completed_label(self) -> None:
        assert countdown_label(TWO_DAYS, True) == COMPLETED_LABEL
        assert countdown_label(None, False) == COMPLETED_LABEL


class TestHandleTick:
    def test_counting_tick_updates_everything(self) -> None:
        handlers, store, view, presentation, announcer = make_handlers()
        handlers.handle_tick(TWO_DAYS)
        presentation.update_time.assert_called_once_with(TWO_DAYS)
        announcer.announce_countdown.assert_called_once_with(TWO_DAYS)
        assert view.aria_label.startswith("Countdown: 2 days")

    def test_no_theme_update_after_celebration(self) -> None:
        handlers, store, view, presentation, announcer = make_handlers()
        transition_to_celebrated(store, view, "UTC")
        handlers.handle_tick(TWO_DAYS)
        presentation.update_time.assert_not_called()
        assert view.aria_label == COMPLETED_LABEL

    def test_without_collaborators(self) -> None:
        store, view = CelebrationStore(), ViewState()
        TimeEventHandlers(store, view, lambda: "UTC").handle_tick(TWO_DAYS)
        assert view.aria_label


class TestHandleComplete:
    def test_first_completion_celebrates(self) -> None:
        handlers, store, view, presentation, announcer = make_handlers("Asia/Tokyo")
        handlers.handle_complete()
        assert store.get_celebration_state() is CelebrationState.CELEBRATED
        assert store.has_celebrated("Asia/Tokyo")
        assert store.is_complete()
        assert view.celebrating
        assert view.aria_label == COMPLETED_LABEL
        presentation.on_celebrating.assert_called_once_with("Happy New Year!")
        presentation.on_celebrated.assert_not_called()
        announcer.announce_celebration.assert_called_once_with()

    def test_already_celebrated_zone_skips_animation(self) -> None:
        handlers, store, view, presentation, announcer = make_handlers("Asia/Tokyo")
        store.mark_celebrated("Asia/Tokyo")
        handlers.handle_complete()
        assert store.get_celebration_state() is CelebrationState.CELEBRATED
        presentation.on_celebrating.assert_not_called()
        presentation.on_celebrated.assert_called_once_with("Happy New Year!")
        announcer.announce_celebration.assert_not_called()

    def test_custom_message(self) -> None:
        store, view, presentation = CelebrationStore(), ViewState(), Mock()
        handlers = TimeEventHandlers(
            store, view, lambda: "UTC", presentation=presentation, message="Time's up"
        )
        handlers.handle_complete()
        presentation.on_celebrating.assert_called_once_with("Time's up")


class TestLoopIntegration:
    def test_loop_drives_handlers_to_celebration(self) -> None:
        clock = ManualClock(start_ms=UTC_MIDNIGHT - 2500)
        handlers, store, view, presentation, announcer = make_handlers()
        loop = TimeLoop(
            get_target_date=lambda: from_epoch_ms(UTC_MIDNIGHT),
            on_tick=handlers.handle_tick,
            on_complete=handlers.handle_complete,
            is_complete=store.is_complete,
            clock=clock,
        )
        loop.start()
        clock.advance(5000)
        assert presentation.update_time.call_count == 3
        presentation.on_celebrating.assert_called_once()
        assert store.get_celebration_state() is CelebrationState.CELEBRATED
        loop.stop()


class TestApplyInitialState:
    def test_past_target_on_load(self) -> None:
        store, view, presentation = CelebrationStore(), ViewState(), Mock()
        apply_initial_state(store, view, "UTC", presentation)
        assert store.get_celebration_state() is CelebrationState.CELEBRATED
        assert store.is_complete()
        assert view.celebrating
        assert view.aria_label == COMPLETED_LABEL
        presentation.on_celebrated.assert_called_once_with("Happy New Year!")

    def test_already_celebrated_is_quiet(self) -> None:
        store, view, presentation = CelebrationStore(), ViewState(), Mock()
        store.mark_celebrated("UTC")
        apply_initial_state(store, view, "UTC", presentation)
        presentation.on_celebrated.assert_not_called()


class Switch:
    """A TimezoneSwitcher at 2026-01-01T00:00Z with recorded collaborators."""

    def __init__(
        self,
        timezone: str,
        mode: CountdownMode = CountdownMode.WALL_CLOCK,
        now_ms: int = UTC_MIDNIGHT,
        target: WallClockTime = NEW_YEAR,
    ) -> None:
        self.clock = ManualClock(start_ms=now_ms)
        self.store = CelebrationStore()
        self.view = ViewState()
        self.presentation = Mock()
        self.targets = []
        self.on_update = Mock()
        self.switcher = TimezoneSwitcher(
            self.store,
            self.view,
            timezone,
            mode,
            self.targets.append,
            wall_clock_target=target if mode is CountdownMode.WALL_CLOCK else None,
            presentation=self.presentation,
            clock=self.clock,
            on_update=self.on_update,
            get_last_time=lambda: TWO_DAYS,
        )


class TestTimezoneSwitcher:
    def test_requires_wall_clock_target(self) -> None:
        with pytest.raises(ValueError):
            TimezoneSwitcher(
                CelebrationStore(), ViewState(), "UTC", CountdownMode.WALL_CLOCK, lambda d: None
            )

    def test_switch_to_zone_past_target(self) -> None:
        s = Switch("America/New_York")
        s.switcher.set_timezone("Asia/Tokyo")
        assert s.targets == [convert_wall_clock_to_absolute(NEW_YEAR, "Asia/Tokyo")]
        assert s.store.get_celebration_state() is CelebrationState.CELEBRATED
        assert s.store.has_celebrated("Asia/Tokyo")
        assert s.view.celebrating
        assert s.view.aria_label == COMPLETED_LABEL
        s.presentation.on_celebrated.assert_called_once_with("Happy New Year!")
        s.on_update.assert_called_once_with()

    def test_no_repeat_celebration_for_same_zone(self) -> None:
        s = Switch("America/New_York")
        s.switcher.set_timezone("Asia/Tokyo")
        s.switcher.set_timezone("Asia/Tokyo")
        s.presentation.on_celebrated.assert_called_once()

    def test_switch_to_zone_before_target(self) -> None:
        s = Switch("Asia/Tokyo")
        s.switcher.set_timezone("Asia/Tokyo")
        s.switcher.set_timezone("America/New_York")
        assert s.store.get_celebration_state() is CelebrationState.COUNTING
        assert not s.store.is_complete()
        assert not s.view.celebrating
        assert s.store.celebrated_timezones == frozenset()
        s.presentation.on_counting.assert_called_once_with()
        assert s.view.aria_label == "Countdown: 2 days, 3 hours, 4 minutes"

    def test_counting_to_counting_does_not_notify(self) -> None:
        s = Switch("America/Chicago")
        s.switcher.set_timezone("America/New_York")
        s.presentation.on_counting.assert_not_called()
        assert s.store.get_celebration_state() is CelebrationState.COUNTING

    def test_presentation_without_on_counting(self) -> None:
        s = Switch("Asia/Tokyo")
        s.switcher.presentation = Mock(spec=["on_celebrating", "on_celebrated", "update_time"])
        s.switcher.set_timezone("Asia/Tokyo")
        s.switcher.set_timezone("America/New_York")
        assert s.store.get_celebration_state() is CelebrationState.COUNTING

    def test_switch_with_day_overflow_target(self) -> None:
        s = Switch("UTC", target=FEB_31)
        s.switcher.set_timezone("Asia/Tokyo")
        assert s.targets == [datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)]
        assert s.store.get_celebration_state() is CelebrationState.COUNTING

    def test_day_overflow_target_reached(self) -> None:
        s = Switch("UTC", target=FEB_31, now_ms=MARCH_4)
        s.switcher.set_timezone("Asia/Tokyo")
        assert s.store.get_celebration_state() is CelebrationState.CELEBRATED
        assert s.store.has_celebrated("Asia/Tokyo")

    @pytest.mark.parametrize("mode", [CountdownMode.TIMER, CountdownMode.ABSOLUTE])
    def test_other_modes_do_not_transition(self, mode) -> None:
        s = Switch("UTC", mode=mode)
        s.switcher.set_timezone("Asia/Tokyo")
        assert s.switcher.timezone == "Asia/Tokyo"
        assert s.targets == []
        assert s.store.get_celebration_state() is CelebrationState.COUNTING
        s.presentation.on_celebrated.assert_not_called()
        s.on_update.assert_called_once_with()

    def test_invalid_zone_falls_back_to_utc(self, caplog) -> None:
        s = Switch("America/New_York")
        with caplog.at_level(logging.WARNING):
            s.switcher.set_timezone("Atlantis/Capital")
        assert s.switcher.timezone == "UTC"
        assert s.store.has_celebrated("UTC")
        assert "Atlantis/Capital" in caplog.text
