"""countdown-celebration - Celebration state machine for countdown views."""
from __future__ import annotations

from countdown_celebration.handlers import (
    COMPLETED_LABEL,
    Announcer,
    Presentation,
    TimeEventHandlers,
    TimezoneSwitcher,
    ViewStore,
    apply_initial_state,
    countdown_label,
)
from countdown_celebration.states import TRANSITIONS, allowed_transitions, is_valid_transition
from countdown_celebration.store import (
    CelebratingMarker,
    CelebrationReader,
    CelebrationResetter,
    CelebrationStateManager,
    CelebrationStateSetter,
    CelebrationStore,
    ViewState,
)
from countdown_celebration.transitions import (
    complete_celebration,
    transition_to_celebrated,
    transition_to_celebrating,
    transition_to_counting,
)

__all__ = [
    "TRANSITIONS",
    "allowed_transitions",
    "is_valid_transition",
    "CelebrationStateSetter",
    "CelebrationResetter",
    "CelebrationReader",
    "CelebrationStateManager",
    "CelebratingMarker",
    "CelebrationStore",
    "ViewState",
    "ViewStore",
    "transition_to_celebrating",
    "complete_celebration",
    "transition_to_celebrated",
    "transition_to_counting",
    "Presentation",
    "Announcer",
    "TimeEventHandlers",
    "TimezoneSwitcher",
    "apply_initial_state",
    "countdown_label",
    "COMPLETED_LABEL",
]
