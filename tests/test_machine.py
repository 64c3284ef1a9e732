import pytest

from escape_utf8.error import InvalidTransitionError
from escape_utf8.machine import ESCAPE_TRANSITIONS, StateMachine, escape_machine
from escape_utf8.types import TERMINAL_STATES, State


def test_machine_initial_state():
    machine = escape_machine()
    assert machine.state == State.READING
    assert not machine.is_terminal


@pytest.mark.parametrize(
    "path",
    [
        [State.EMIT, State.READING, State.DONE],
        [State.DECODING, State.EMIT, State.READING, State.DONE],
        [State.DECODING, State.FAIL],
        [State.EMIT, State.FAIL],
        [State.FAIL],
        [State.DONE],
    ],
)
def test_machine_valid_paths(path):
    machine = escape_machine()
    for state in path:
        machine.set_state(state)
        assert machine.state == state
    assert machine.is_terminal


@pytest.mark.parametrize(
    "path,illegal",
    [
        ([], State.READING),
        ([State.DECODING], State.DONE),
        ([State.DECODING], State.READING),
        ([State.EMIT], State.DONE),
        ([State.EMIT], State.DECODING),
        ([State.DONE], State.READING),
        ([State.FAIL], State.READING),
        ([State.FAIL], State.FAIL),
    ],
)
def test_machine_rejects_illegal_transition(path, illegal):
    machine = escape_machine()
    for state in path:
        machine.set_state(state)
    before = machine.state

    with pytest.raises(InvalidTransitionError, match="Cannot transition"):
        machine.set_state(illegal)
    assert machine.state == before


@pytest.mark.parametrize("state", list(State))
def test_machine_terminal_states_have_no_exits(state: State):
    assert (not ESCAPE_TRANSITIONS[state]) == (state in TERMINAL_STATES)


def test_machine_can_transition_does_not_change_state():
    machine = escape_machine()
    assert machine.can_transition(State.DECODING)
    assert not machine.can_transition(State.READING)
    assert machine.state == State.READING


def test_generic_machine_with_unknown_state_is_terminal():
    machine = StateMachine[str]("a", {"a": {"b"}})
    machine.set_state("b")
    assert machine.is_terminal
    with pytest.raises(InvalidTransitionError):
        machine.set_state("a")
