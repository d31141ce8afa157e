"""Celebration store capabilities and a reference in-memory store."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from countdown.types import CelebrationState

from countdown_celebration.states import is_valid_transition

logger = logging.getLogger(__name__)


@runtime_checkable
class CelebrationStateSetter(Protocol):
    def set_celebration_state(self, state: CelebrationState) -> None: ...


@runtime_checkable
class CelebrationResetter(Protocol):
    """What a reset-only call site needs."""

    def reset_celebration(self) -> None: ...

    def set_complete(self, complete: bool) -> None: ...


@runtime_checkable
class CelebrationReader(Protocol):
    def get_celebration_state(self) -> CelebrationState: ...

    def has_celebrated(self, timezone: str) -> bool: ...


@runtime_checkable
class CelebrationStateManager(Protocol):
    """The full set of writes a celebration transition may perform."""

    def set_celebration_state(self, state: CelebrationState) -> None: ...

    def mark_celebrated(self, timezone: str) -> None: ...

    def set_complete(self, complete: bool) -> None: ...

    def reset_celebration(self) -> None: ...

    def has_celebrated(self, timezone: str) -> bool: ...


@runtime_checkable
class CelebratingMarker(Protocol):
    """The view flag presentation and ARIA hooks key off."""

    def set_celebrating(self, celebrating: bool) -> None: ...


class CelebrationStore:
    """Single owner of celebration state for one countdown view.

    Holds the current ``CelebrationState``, the set of timezones that have
    already celebrated the current target, and the completion flag. State
    changes outside the transition table are logged and ignored.
    """

    def __init__(self) -> None:
        self._state = CelebrationState.COUNTING
        self._celebrated: set[str] = set()
        self._complete = False

    def get_celebration_state(self) -> CelebrationState:
        return self._state

    def set_celebration_state(self, state: CelebrationState) -> None:
        if state is self._state:
            return
        if not is_valid_transition(self._state, state):
            logger.warning(
                "invalid celebration transition: %s -> %s", self._state.value, state.value
            )
            return
        self._state = state

    def has_celebrated(self, timezone: str) -> bool:
        return timezone in self._celebrated

    def mark_celebrated(self, timezone: str) -> None:
        self._celebrated.add(timezone)

    @property
    def celebrated_timezones(self) -> frozenset[str]:
        return frozenset(self._celebrated)

    def reset_celebration(self) -> None:
        """Back to COUNTING and forget every celebrated timezone."""
        self._state = CelebrationState.COUNTING
        self._celebrated.clear()

    def is_complete(self) -> bool:
        return self._complete

    def set_complete(self, complete: bool) -> None:
        self._complete = complete


@dataclass
class ViewState:
    """Minimal view: the celebrating marker plus the accessible label."""

    celebrating: bool = False
    aria_label: str = ""

    def set_celebrating(self, celebrating: bool) -> None:
        self.celebrating = celebrating

    def set_aria_label(self, label: str) -> bool:
        """Update the label; returns False when it was already current."""
        if label == self.aria_label:
            return False
        self.aria_label = label
        return True
