"""
Type definitions and enums for the state machine.

This module contains shared type definitions used across the package. It has
no runtime dependencies on other modules, which keeps it importable from both
the core and the runtime packages without cycles.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Hashable, Optional

# Type aliases for identifiers
StateID = Hashable
ArrowID = Hashable

# Callback types
TransitionAction = Callable[..., Any]
AvailabilityPredicate = Callable[..., Any]


class MachineStatus(Enum):
    """Defines the possible states of a machine instance itself.

    A machine is BUSY from the moment a transition's action starts until it
    settles, and IDLE otherwise.
    """

    IDLE = auto()  # No transition in flight
    BUSY = auto()  # An action has started but not yet settled


@dataclass(frozen=True)
class PendingTransition:
    """Describes the transition currently in flight.

    ``target_arrow`` is None for machines without labeled arrows.
    """

    target_arrow: Optional[ArrowID]
    target_state: StateID
