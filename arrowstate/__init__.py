"""arrowstate: finite state machine runtime with labeled arrows

A machine is described declaratively by its states, the arrows labeling its
edges, and per-edge actions with optional availability predicates. It can be
asked for its current state, whether a transition is permitted right now, and
to perform a transition whose action may be synchronous or asynchronous.

Responsibilities:
    - Validation of the machine description at construction
    - A single legality check shared by queries and transitions
    - Uniform settlement of raising, returning and awaitable actions
    - At most one transition in flight per machine

Error Handling:
    - Every refusal raises a StateMachineError subclass with diagnostic fields
    - Errors raised by actions propagate unchanged

Logging:
    - Debug records through the standard ``logging`` module, under ``arrowstate``
"""

from arrowstate.core import (
    ArrowNotAvailableError,
    BaseStateMachine,
    ConcurrentTransitionError,
    GuardedAction,
    InvalidOptionsError,
    MachineOptions,
    MachineStatus,
    NoArrowsError,
    PendingTransition,
    SimpleStateMachine,
    StateMachine,
    StateMachineError,
    UnknownArrowError,
    UnknownStateError,
    UnreachableStateError,
    Validator,
)

__version__ = "0.1.0"

__all__ = [
    # Machines
    "BaseStateMachine",
    "StateMachine",
    "SimpleStateMachine",
    # Description
    "GuardedAction",
    "MachineOptions",
    "Validator",
    # Runtime records
    "MachineStatus",
    "PendingTransition",
    # Errors
    "StateMachineError",
    "InvalidOptionsError",
    "ConcurrentTransitionError",
    "UnreachableStateError",
    "UnknownStateError",
    "UnknownArrowError",
    "NoArrowsError",
    "ArrowNotAvailableError",
]
