"""Finite-state machine primitive for status fields.

A ``StateMachine`` is an adjacency table plus its terminal states.
``transition`` never raises: it returns a ``TransitionResult`` so the
caller decides which domain error to surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Mapping, Optional


class Rejection(StrEnum):
    TERMINAL = "terminal"
    NOT_ALLOWED = "not_allowed"


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a transition request."""

    current: str
    requested: str
    state: Optional[str] = None
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


class StateMachine:
    """Directed transition graph for one status domain."""

    def __init__(
        self,
        transitions: Mapping[str, Iterable[str]],
        terminal_states: Optional[Iterable[str]] = None,
    ) -> None:
        self._transitions = {
            str(state): frozenset(str(target) for target in targets)
            for state, targets in transitions.items()
        }
        if terminal_states is None:
            terminal_states = [s for s, t in self._transitions.items() if not t]
        self._terminal = frozenset(str(state) for state in terminal_states)

    @property
    def terminal_states(self) -> frozenset[str]:
        return self._terminal

    def is_terminal(self, state: str) -> bool:
        return str(state) in self._terminal

    def allowed_targets(self, state: str) -> frozenset[str]:
        return self._transitions.get(str(state), frozenset())

    def can_transition(self, current: str, requested: str) -> bool:
        return self.transition(current, requested).accepted

    def transition(self, current: str, requested: str) -> TransitionResult:
        """Validate ``current -> requested``.

        A terminal ``current`` is rejected before the target is looked at.
        """
        current, requested = str(current), str(requested)
        if self.is_terminal(current):
            return TransitionResult(current, requested, rejection=Rejection.TERMINAL)
        if requested not in self.allowed_targets(current):
            return TransitionResult(
                current, requested, rejection=Rejection.NOT_ALLOWED
            )
        return TransitionResult(current, requested, state=requested)
