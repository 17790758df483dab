"""
Core package: error taxonomy, edge variants, description validation and the
state machines themselves.
"""

# Import order matters to avoid circular dependencies
from .errors import (
    ArrowNotAvailableError,
    ConcurrentTransitionError,
    InvalidOptionsError,
    NoArrowsError,
    StateMachineError,
    UnknownArrowError,
    UnknownStateError,
    UnreachableStateError,
)
from .types import MachineStatus, PendingTransition
from .edges import ActionEdge, Edge, GuardedAction, GuardedEdge, InvalidEdge, NoOpEdge, resolve_edge
from .validation import MachineOptions, Validator
from .state_machine import BaseStateMachine, SimpleStateMachine, StateMachine

__all__ = [
    # Errors
    "StateMachineError",
    "InvalidOptionsError",
    "ConcurrentTransitionError",
    "UnreachableStateError",
    "UnknownStateError",
    "UnknownArrowError",
    "NoArrowsError",
    "ArrowNotAvailableError",
    # Types
    "MachineStatus",
    "PendingTransition",
    # Edges
    "Edge",
    "NoOpEdge",
    "ActionEdge",
    "GuardedEdge",
    "InvalidEdge",
    "GuardedAction",
    "resolve_edge",
    # Validation
    "MachineOptions",
    "Validator",
    # Machines
    "BaseStateMachine",
    "StateMachine",
    "SimpleStateMachine",
]
