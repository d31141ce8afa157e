"""countdown-loop - Periodic remaining-time ticks for the countdown core."""
from __future__ import annotations

from countdown_loop.loop import TimeLoop
from countdown_loop.playback import TimerControls

__all__ = ["TimeLoop", "TimerControls"]
