# arrowstate/core/edges.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from arrowstate.core.types import AvailabilityPredicate, TransitionAction


@dataclass(frozen=True)
class GuardedAction:
    """
    Record form of an edge: an action plus an optional availability predicate.
    Equivalent to the mapping ``{"available": ..., "transition": ...}``.

    :param transition: The action run when the edge is taken.
    :param available: Predicate deciding whether the edge may be taken now.
    """

    transition: TransitionAction
    available: Optional[AvailabilityPredicate] = None


class Edge(ABC):
    """
    Resolved edge spec. Every variant answers whether it is available for the
    given arguments and knows how to run its action.
    """

    def __init__(self, spec: Any) -> None:
        self._spec = spec

    @property
    def spec(self) -> Any:
        """The value the edge was declared with."""
        return self._spec

    def is_available(self, *args: Any, **kwargs: Any) -> bool:
        return True

    @abstractmethod
    def run(self, *args: Any, **kwargs: Any) -> Any:
        """Run the edge's action with the caller's arguments."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._spec!r})"


class NoOpEdge(Edge):
    """Edge declared as ``True``: always available, does nothing."""

    def __init__(self) -> None:
        super().__init__(True)

    def run(self, *args: Any, **kwargs: Any) -> None:
        return None


class ActionEdge(Edge):
    """Edge declared as a bare callable."""

    def __init__(self, action: TransitionAction) -> None:
        super().__init__(action)
        self._action = action

    def run(self, *args: Any, **kwargs: Any) -> Any:
        return self._action(*args, **kwargs)


class GuardedEdge(Edge):
    """Edge declared as a record with ``transition`` and optional ``available``."""

    def __init__(
        self,
        spec: Any,
        transition: TransitionAction,
        available: Optional[AvailabilityPredicate] = None,
    ) -> None:
        super().__init__(spec)
        self._transition = transition
        self._available = available

    def is_available(self, *args: Any, **kwargs: Any) -> bool:
        if self._available is None:
            return True
        return bool(self._available(*args, **kwargs))

    def run(self, *args: Any, **kwargs: Any) -> Any:
        return self._transition(*args, **kwargs)


class InvalidEdge(Edge):
    """
    Edge whose declared value has none of the recognized shapes. It fails when
    run. A malformed record still keeps its callable ``available``, so the gate
    consults the predicate before the shape error surfaces.
    """

    def __init__(self, spec: Any, available: Optional[AvailabilityPredicate] = None) -> None:
        super().__init__(spec)
        self._available = available

    def is_available(self, *args: Any, **kwargs: Any) -> bool:
        if self._available is None:
            return True
        return bool(self._available(*args, **kwargs))

    def run(self, *args: Any, **kwargs: Any) -> Any:
        raise TypeError(f"Expected transition function, `{{transition}}` or `True`, instead got {self._spec!r}")


def resolve_edge(spec: Any) -> Edge:
    """
    Classify a declared edge value into one of the edge variants.

    A falsy ``available`` counts as no predicate at all.

    :param spec: ``True``, a callable, a mapping/GuardedAction record, or anything else.
    :return: The resolved Edge. Unrecognized values yield an InvalidEdge.
    """
    if isinstance(spec, Edge):
        return spec
    if spec is True:
        return NoOpEdge()
    if isinstance(spec, GuardedAction):
        transition, available = spec.transition, spec.available
    elif isinstance(spec, Mapping):
        transition, available = spec.get("transition"), spec.get("available")
    elif callable(spec):
        return ActionEdge(spec)
    else:
        return InvalidEdge(spec)

    if not available:
        available = None
    if available is not None and not callable(available):
        return InvalidEdge(spec)
    if not callable(transition):
        return InvalidEdge(spec, available)
    return GuardedEdge(spec, transition, available)
