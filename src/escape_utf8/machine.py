from __future__ import annotations

from typing import Dict, Generic, Set, TypeVar

from escape_utf8.error import InvalidTransitionError
from escape_utf8.types import State

S = TypeVar("S")


class StateMachine(Generic[S]):
    def __init__(self, start_state: S, transitions: Dict[S, Set[S]]) -> None:
        self._state: S = start_state
        self._transitions = transitions

    @property
    def state(self) -> S:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return not self._transitions.get(self._state)

    def can_transition(self, new_state: S) -> bool:
        return new_state in self._transitions.get(self._state, set())

    def set_state(self, new_state: S) -> None:
        if not self.can_transition(new_state):
            raise InvalidTransitionError(str(self._state), str(new_state))
        self._state = new_state


ESCAPE_TRANSITIONS: Dict[State, Set[State]] = {
    State.READING: {State.DECODING, State.EMIT, State.FAIL, State.DONE},
    State.DECODING: {State.EMIT, State.FAIL},
    State.EMIT: {State.READING, State.FAIL},
    State.FAIL: set(),
    State.DONE: set(),
}


def escape_machine() -> StateMachine[State]:
    return StateMachine[State](State.READING, ESCAPE_TRANSITIONS)
