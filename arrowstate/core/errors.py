# arrowstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Sequence, Union


class StateMachineError(Exception):
    """
    Base exception class for errors raised by the state machine itself.

    Every error carries structured diagnostic fields in addition to its message.
    The fields are passed as keyword arguments and become attributes of the
    exception, so callers can inspect e.g. ``err.target_state`` without parsing
    the message.

    :param message: The error message, or a sequence of fragments joined together.
    :param info: Diagnostic fields to attach to the error.
    """

    def __init__(self, message: Union[str, Sequence[Any]] = "", **info: Any) -> None:
        if not isinstance(message, str):
            message = "".join(str(part) for part in message)
        super().__init__(message)
        self._info = dict(info)
        for key, value in info.items():
            setattr(self, key, value)

    @property
    def info(self) -> Dict[str, Any]:
        """A copy of the diagnostic fields attached to this error."""
        return dict(self._info)


class InvalidOptionsError(StateMachineError):
    """
    Raised when the machine description passed at construction is malformed.
    """


class ConcurrentTransitionError(StateMachineError):
    """
    Raised when a transition is requested while another one is still in flight.

    Carries ``target_arrow``/``target_state`` for the rejected request and
    ``current_target_arrow``/``current_target_state`` for the active one.
    """


class UnreachableStateError(StateMachineError):
    """
    Groups every error meaning the requested state can't be reached right now.
    """


class UnknownStateError(UnreachableStateError):
    """
    Raised when a request or the ``initial`` option names an undeclared state.
    """


class UnknownArrowError(UnreachableStateError):
    """
    Raised when a request names an undeclared arrow.
    """


class NoArrowsError(UnreachableStateError):
    """
    Raised when no edge leads from the current state to the requested state.
    """


class ArrowNotAvailableError(NoArrowsError):
    """
    Raised when the edge exists but its availability predicate declined.
    """
