"""Celebration transition table."""
from __future__ import annotations

from countdown.types import CelebrationState

COUNTING = CelebrationState.COUNTING
CELEBRATING = CelebrationState.CELEBRATING
CELEBRATED = CelebrationState.CELEBRATED

# counting -> celebrated skips the animation (target already past, or the
# timezone already celebrated). celebrated -> counting only happens on a
# wall-clock timezone switch to a zone that has not reached the target.
TRANSITIONS: dict[CelebrationState, tuple[CelebrationState, ...]] = {
    COUNTING: (CELEBRATING, CELEBRATED),
    CELEBRATING: (CELEBRATED,),
    CELEBRATED: (COUNTING,),
}


def is_valid_transition(current: CelebrationState, target: CelebrationState) -> bool:
    return target in TRANSITIONS[current]


def allowed_transitions(current: CelebrationState) -> list[CelebrationState]:
    return list(TRANSITIONS[current])
