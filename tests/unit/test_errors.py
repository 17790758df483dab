# tests/unit/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


def test_error_hierarchy(error_classes):
    (
        StateMachineError,
        InvalidOptionsError,
        ConcurrentTransitionError,
        UnreachableStateError,
        UnknownStateError,
        UnknownArrowError,
        NoArrowsError,
        ArrowNotAvailableError,
    ) = error_classes
    assert issubclass(StateMachineError, Exception)
    assert issubclass(InvalidOptionsError, StateMachineError)
    assert issubclass(ConcurrentTransitionError, StateMachineError)
    assert issubclass(UnreachableStateError, StateMachineError)
    assert issubclass(UnknownStateError, UnreachableStateError)
    assert issubclass(UnknownArrowError, UnreachableStateError)
    assert issubclass(NoArrowsError, UnreachableStateError)
    assert issubclass(ArrowNotAvailableError, NoArrowsError)
    assert not issubclass(ConcurrentTransitionError, UnreachableStateError)


def test_message_fragments_are_joined(error_classes):
    UnknownStateError = error_classes[4]
    e = UnknownStateError(["Can't go to unknown state `", "x", "`"])
    assert str(e) == "Can't go to unknown state `x`"


def test_message_fragments_are_stringified(error_classes):
    NoArrowsError = error_classes[6]
    e = NoArrowsError(["from `", 1, "` to `", None, "`"])
    assert str(e) == "from `1` to `None`"


def test_diagnostic_fields(error_classes):
    ConcurrentTransitionError = error_classes[2]
    e = ConcurrentTransitionError(
        "busy",
        target_state="b",
        target_arrow="ab",
        current_target_state="c",
        current_target_arrow="ac",
    )
    assert str(e) == "busy"
    assert e.target_state == "b"
    assert e.current_target_arrow == "ac"
    assert e.info == {
        "target_state": "b",
        "target_arrow": "ab",
        "current_target_state": "c",
        "current_target_arrow": "ac",
    }


def test_info_is_a_copy(error_classes):
    InvalidOptionsError = error_classes[1]
    e = InvalidOptionsError("bad", key="states")
    e.info["key"] = "changed"
    assert e.info == {"key": "states"}


def test_exceptions_instantiation(error_classes):
    StateMachineError = error_classes[0]
    e = StateMachineError()
    assert str(e) == ""
    assert e.info == {}
