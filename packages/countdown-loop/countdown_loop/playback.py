"""Timer-mode play/pause/reset controls on top of a TimeLoop."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Protocol

from countdown.time import from_epoch_ms
from countdown.types import CelebrationState, CountdownMode

from countdown_loop.loop import TimeLoop

if TYPE_CHECKING:
    from countdown_celebration import CelebratingMarker, CelebrationReader, CelebrationResetter

    class _PlaybackStore(CelebrationReader, CelebrationResetter, Protocol):
        ...

logger = logging.getLogger(__name__)


@dataclass
class TimerControls:
    """Play/pause/reset for duration-based countdowns.

    Every operation is a no-op outside ``CountdownMode.TIMER``. The loop
    only remembers the remaining duration while paused; these controls turn
    it back into a target date on resume.
    """

    loop: TimeLoop
    mode: CountdownMode
    update_target_date: Callable[[datetime], None]
    store: _PlaybackStore
    view: CelebratingMarker
    original_duration_ms: int | None = None
    on_counting: Callable[[], None] | None = None
    on_playing_changed: Callable[[bool], None] | None = None

    def _retarget(self, remaining_ms: int) -> None:
        self.update_target_date(from_epoch_ms(self.loop.clock.now_ms() + remaining_ms))

    def play_pause(self, is_playing: bool) -> None:
        if self.mode is not CountdownMode.TIMER:
            return
        if is_playing:
            paused_ms = self.loop.paused_remaining_ms
            if paused_ms is not None and paused_ms > 0:
                self._retarget(paused_ms)
            self.loop.resume()
        else:
            self.loop.pause()

    def reset(self) -> None:
        """Restart from the original duration, keeping the play/pause state."""
        if self.mode is not CountdownMode.TIMER or self.original_duration_ms is None:
            return

        was_paused = self.loop.is_paused()
        was_celebrating = self.store.get_celebration_state() is not CelebrationState.COUNTING

        self._retarget(self.original_duration_ms)

        if was_celebrating:
            logger.debug("resetting timer out of celebration")
            self.store.reset_celebration()
            self.store.set_complete(False)
            self.view.set_celebrating(False)
            if self.on_playing_changed is not None:
                self.on_playing_changed(True)
            if self.on_counting is not None:
                self.on_counting()
            if not self.loop.is_running():
                self.loop.start()
        elif was_paused:
            self.loop.set_paused_remaining_ms(self.original_duration_ms)

        self.loop.force_update()
