"""Property-based tests for the transition gate and executor invariants."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from arrowstate import (
    ArrowNotAvailableError,
    InvalidOptionsError,
    SimpleStateMachine,
    StateMachine,
    UnreachableStateError,
)

state_names = st.lists(st.text(min_size=1, max_size=5), min_size=1, max_size=6, unique=True)


@pytest.mark.property
@given(states=state_names, data=st.data())
def test_initial_state_after_construction(states, data):
    initial = data.draw(st.one_of(st.none(), st.sampled_from(states)))
    s = SimpleStateMachine(states=states, initial=initial, transitions={})
    assert s.state == (states[0] if initial is None else initial)
    assert not s.is_busy()


@pytest.mark.property
@given(states=state_names, drop=st.sampled_from(["states", "transitions"]))
def test_missing_states_or_transitions(states, drop):
    options = {"states": states, "arrows": ["x"], "transitions": {}}
    del options[drop]
    with pytest.raises(InvalidOptionsError):
        StateMachine(options)


@pytest.mark.property
@given(attempts=st.integers(min_value=1, max_value=20), args=st.lists(st.integers(), max_size=3))
def test_declined_edge_is_idempotent(attempts, args):
    s = StateMachine(
        states=["a", "b"],
        arrows=["ab"],
        transitions={"a": {"b": {"ab": {"available": lambda *a: False, "transition": lambda *a: None}}}},
    )
    for _ in range(attempts):
        assert s.can_go("ab", "b", *args) is False
    with pytest.raises(ArrowNotAvailableError):
        s.go("ab", "b", *args)
    assert s.state == "a"
    assert not s.is_busy()


@pytest.mark.property
@settings(max_examples=50)
@given(path=st.lists(st.sampled_from(["a", "b", "c", "z"]), max_size=15))
def test_state_advances_only_on_success(path):
    # a -> b always works, b -> c always raises, c -> a always works
    def fail():
        raise RuntimeError("b -> c")

    s = SimpleStateMachine(
        states=["a", "b", "c"],
        transitions={"a": {"b": True}, "b": {"c": fail}, "c": {"a": lambda: None}},
    )
    for target in path:
        before = s.state
        try:
            s.go(target)
        except (UnreachableStateError, RuntimeError):
            assert s.state == before
        else:
            assert s.state == target
        assert not s.is_busy()
