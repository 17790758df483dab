# arrowstate/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from arrowstate.core.edges import Edge
from arrowstate.core.errors import (
    ArrowNotAvailableError,
    ConcurrentTransitionError,
    NoArrowsError,
    UnknownArrowError,
    UnknownStateError,
)
from arrowstate.core.types import ArrowID, MachineStatus, PendingTransition, StateID
from arrowstate.core.validation import MachineOptions, Validator, edge_count
from arrowstate.runtime.cell import Cell
from arrowstate.runtime.concurrency import get_lock, with_lock
from arrowstate.runtime.executor import TransitionExecutor

logger = logging.getLogger(__name__)


class BaseStateMachine:
    """
    Shared engine of both machine flavours: owns the validated description,
    the current state and in-flight transition cells, and the transition gate.

    Subclasses decide whether edges are labeled by arrows and expose the public
    ``can_go``/``go`` signatures accordingly.
    """

    _labeled = True

    def __init__(self, options: Optional[Mapping] = None, validator: Optional[Validator] = None, **overrides: Any):
        """
        :param options: Mapping with ``states``, ``transitions``, optional
                        ``initial`` and, for labeled machines, ``arrows``.
        :param validator: Optional validator used to check the description.
        :param overrides: Options given as keywords; they take precedence over ``options``.
        :raises InvalidOptionsError: If the description is malformed.
        :raises UnknownStateError: If ``initial`` is not a declared state.
        """
        raw = dict(options) if options is not None else {}
        raw.update(overrides)
        self._options: MachineOptions = (validator or Validator()).validate_options(raw, require_arrows=self._labeled)

        self._lock = get_lock()
        self._state: Cell[StateID] = Cell(self._options.initial)
        self._pending: Cell[Optional[PendingTransition]] = Cell(None)
        self._executor = TransitionExecutor(self._state, self._pending, self._lock)

        logger.debug(
            "%s created in state %r with %d states and %d edges",
            type(self).__name__,
            self._options.initial,
            len(self._options.states),
            edge_count(self._options),
        )

    @property
    def state(self) -> StateID:
        """The current state."""
        return self._state.get()

    @property
    def initial(self) -> StateID:
        return self._options.initial

    @property
    def states(self) -> Tuple[StateID, ...]:
        return self._options.states

    @property
    def arrows(self) -> Tuple[ArrowID, ...]:
        return self._options.arrows

    @property
    def transitions(self) -> Mapping:
        """Read-only view of the declared transitions, with resolved edges as leaves."""
        return self._options.transitions

    @property
    def pending_transition(self) -> Optional[PendingTransition]:
        """The transition currently in flight, or None."""
        return self._pending.get()

    @property
    def status(self) -> MachineStatus:
        return MachineStatus.BUSY if self.is_busy() else MachineStatus.IDLE

    def is_busy(self) -> bool:
        """True while a transition's action has started but not yet settled."""
        return self._pending.get() is not None

    def _dry_go(self, target_arrow: Optional[ArrowID], target_state: StateID, *args: Any, **kwargs: Any) -> Edge:
        """
        Decide whether the requested transition is legal right now, without
        changing anything.

        :return: The edge to run.
        :raises UnknownStateError: The target state is not declared.
        :raises UnknownArrowError: The arrow is not declared.
        :raises ConcurrentTransitionError: Another transition is in flight.
        :raises NoArrowsError: No edge leads from the current state to the target.
        :raises ArrowNotAvailableError: The edge's availability predicate declined.
        """
        if target_state not in self._options.states:
            raise UnknownStateError(
                ["Can't go to unknown state `", target_state, "`"],
                target_state=target_state,
                states=self._options.states,
            )

        if self._labeled and target_arrow not in self._options.arrows:
            raise UnknownArrowError(
                ["Can't perform transition via unknown arrow `", target_arrow, "`"],
                target_arrow=target_arrow,
                arrows=self._options.arrows,
            )

        current = self._pending.get()
        if current is not None:
            raise ConcurrentTransitionError(
                [
                    "Attempted transition to `",
                    target_state,
                    "` via `",
                    target_arrow,
                    "` while already transitioning to `",
                    current.target_state,
                    "` via `",
                    current.target_arrow,
                    "`",
                ],
                target_state=target_state,
                target_arrow=target_arrow,
                current_target_state=current.target_state,
                current_target_arrow=current.target_arrow,
            )

        current_state = self._state.get()
        edge = self._find_edge(current_state, target_arrow, target_state)

        if not edge.is_available(*args, **kwargs):
            raise ArrowNotAvailableError(
                "Arrow was not available",
                edge=edge,
                current_state=current_state,
                target_state=target_state,
                target_arrow=target_arrow,
            )
        return edge

    def _find_edge(self, current_state: StateID, target_arrow: Optional[ArrowID], target_state: StateID) -> Edge:
        defined_targets = self._options.transitions.get(current_state)
        if not defined_targets:
            raise NoArrowsError(
                ["No states are defined to be reachable from `", current_state, "`"],
                current_state=current_state,
            )

        defined = defined_targets.get(target_state)
        if defined is None or (self._labeled and not defined):
            raise NoArrowsError(
                ["No arrows defined from `", current_state, "` to `", target_state, "`"],
                current_state=current_state,
                target_state=target_state,
            )

        if not self._labeled:
            return defined

        edge = defined.get(target_arrow)
        if edge is None:
            raise NoArrowsError(
                ["No arrow `", target_arrow, "` defined from `", current_state, "` to `", target_state, "`"],
                current_state=current_state,
                target_state=target_state,
                target_arrow=target_arrow,
            )
        return edge

    def _can_go(self, target_arrow: Optional[ArrowID], target_state: StateID, *args: Any, **kwargs: Any) -> bool:
        try:
            with with_lock(self._lock):
                self._dry_go(target_arrow, target_state, *args, **kwargs)
        except ArrowNotAvailableError:
            return False
        return True

    def _go(self, target_arrow: Optional[ArrowID], target_state: StateID, *args: Any, **kwargs: Any) -> Any:
        with with_lock(self._lock):
            edge = self._dry_go(target_arrow, target_state, *args, **kwargs)
            pending = self._executor.begin(target_arrow, target_state)
        return self._executor.execute(pending, edge, *args, **kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self.state!r} status={self.status.name}>"


class StateMachine(BaseStateMachine):
    """
    State machine whose edges are labeled by arrows, so several distinct edges
    may connect the same two states.

    Example:
        machine = StateMachine(
            states=["closed", "open"],
            arrows=["push", "pull"],
            transitions={"closed": {"open": {"push": True, "pull": True}}},
        )
        machine.go("push", "open")
    """

    _labeled = True

    def can_go(self, target_arrow: ArrowID, target_state: StateID, *args: Any, **kwargs: Any) -> bool:
        """
        Check whether ``go`` with the same arguments would be accepted now.

        Only a declining availability predicate yields False; every other
        refusal is raised, since it means the request itself is wrong.
        """
        return self._can_go(target_arrow, target_state, *args, **kwargs)

    def go(self, target_arrow: ArrowID, target_state: StateID, *args: Any, **kwargs: Any) -> Any:
        """
        Move to ``target_state`` via ``target_arrow``, passing the remaining
        arguments to the edge's availability predicate and action.

        :return: The action's value, or an asyncio Future of it when the action
                 returned an awaitable.
        """
        return self._go(target_arrow, target_state, *args, **kwargs)


class SimpleStateMachine(BaseStateMachine):
    """
    State machine with at most one edge between two states, declared as
    ``transitions[source][target] = edge``.
    """

    _labeled = False

    def can_go(self, target_state: StateID, *args: Any, **kwargs: Any) -> bool:
        """Check whether ``go`` with the same arguments would be accepted now."""
        return self._can_go(None, target_state, *args, **kwargs)

    def go(self, target_state: StateID, *args: Any, **kwargs: Any) -> Any:
        """Move to ``target_state``; see ``StateMachine.go``."""
        return self._go(None, target_state, *args, **kwargs)
