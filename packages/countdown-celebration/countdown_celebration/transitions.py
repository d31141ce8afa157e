"""Celebration transitions over an externally owned store.

Each procedure applies one transition's writes together. None of them keep
state or re-validate the call sequence; callers consult
``has_celebrated`` before choosing which one to run.
"""
from __future__ import annotations

from countdown.types import CelebrationState

from countdown_celebration.store import (
    CelebratingMarker,
    CelebrationResetter,
    CelebrationStateManager,
    CelebrationStateSetter,
)


def transition_to_celebrating(
    store: CelebrationStateManager, view: CelebratingMarker, timezone: str
) -> None:
    """COUNTING -> CELEBRATING: the target was reached live in ``timezone``."""
    store.set_celebration_state(CelebrationState.CELEBRATING)
    store.mark_celebrated(timezone)
    store.set_complete(True)
    view.set_celebrating(True)


def complete_celebration(store: CelebrationStateSetter) -> None:
    """CELEBRATING -> CELEBRATED."""
    store.set_celebration_state(CelebrationState.CELEBRATED)


def transition_to_celebrated(
    store: CelebrationStateManager, view: CelebratingMarker, timezone: str
) -> None:
    """Straight to CELEBRATED without the entry animation."""
    store.set_celebration_state(CelebrationState.CELEBRATED)
    store.mark_celebrated(timezone)
    store.set_complete(True)
    view.set_celebrating(True)


def transition_to_counting(store: CelebrationResetter, view: CelebratingMarker) -> None:
    """Back to COUNTING after a wall-clock switch to a zone still counting down."""
    store.reset_celebration()
    store.set_complete(False)
    view.set_celebrating(False)
