# arrowstate/core/validation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from arrowstate.core.edges import Edge, resolve_edge
from arrowstate.core.errors import InvalidOptionsError, UnknownStateError
from arrowstate.core.types import ArrowID, StateID

KNOWN_OPTIONS = frozenset({"states", "arrows", "initial", "transitions"})


@dataclass(frozen=True)
class MachineOptions:
    """
    Validated, normalized machine description. Immutable after construction.

    ``transitions`` maps source -> target -> edge for machines without arrows,
    and source -> target -> arrow -> edge otherwise. Leaves are resolved Edges.
    """

    states: Tuple[StateID, ...]
    arrows: Tuple[ArrowID, ...]
    initial: StateID
    transitions: Mapping


class Validator:
    """
    Performs construction-time validation of a raw machine description and
    produces the normalized MachineOptions the machine runs on.
    """

    def __init__(self) -> None:
        self._rules_engine = _ValidationRulesEngine()

    def validate_options(self, raw: Optional[Mapping], require_arrows: bool = True) -> MachineOptions:
        """
        Check the description and normalize it.

        The caller's mapping is copied first and never modified.

        :param raw: The machine description, or None.
        :param require_arrows: True for machines whose edges are labeled by arrows.
        :raises InvalidOptionsError: If the description is malformed.
        :raises UnknownStateError: If the initial state is not declared.
        """
        options: Dict[str, Any] = dict(raw) if raw is not None else {}
        return self._rules_engine.apply(options, require_arrows)


class _ValidationRulesEngine:
    """
    Internal engine applying the validation rules in order, so that the first
    problem found is the one reported.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def apply(self, options: Dict[str, Any], require_arrows: bool) -> MachineOptions:
        rules = self._default_rules
        rules.validate_keys(options, require_arrows)
        states = rules.validate_states(options)
        arrows = rules.validate_arrows(options, require_arrows)
        initial = rules.validate_initial(options, states)
        transitions = rules.validate_transitions(options, states, require_arrows)
        return MachineOptions(states=states, arrows=arrows, initial=initial, transitions=transitions)


class _DefaultValidationRules:
    """
    Built-in rules. Arrow identifiers inside ``transitions`` are intentionally
    not checked here; the transition gate rejects unknown arrows at call time.
    """

    @staticmethod
    def validate_keys(options: Dict[str, Any], require_arrows: bool) -> None:
        unknown = set(options) - KNOWN_OPTIONS
        if unknown:
            raise InvalidOptionsError(f"Unknown options: {sorted(unknown, key=str)}", options=sorted(unknown, key=str))
        if not require_arrows and options.get("arrows") is not None:
            raise InvalidOptionsError("`arrows` option is only supported by machines with labeled arrows")

    @staticmethod
    def validate_states(options: Dict[str, Any]) -> Tuple[StateID, ...]:
        states = _as_identifiers(options.get("states"))
        if not states:
            raise InvalidOptionsError("`states` option is required")
        return states

    @staticmethod
    def validate_arrows(options: Dict[str, Any], require_arrows: bool) -> Tuple[ArrowID, ...]:
        if not require_arrows:
            return ()
        arrows = _as_identifiers(options.get("arrows"))
        if not arrows:
            raise InvalidOptionsError("`arrows` option is required")
        return arrows

    @staticmethod
    def validate_initial(options: Dict[str, Any], states: Tuple[StateID, ...]) -> StateID:
        initial = options.get("initial")
        if initial is None:
            initial = states[0]
        if initial not in states:
            raise UnknownStateError(
                f"`initial` option references unknown state: {initial}",
                target=initial,
                states=states,
            )
        return initial

    @staticmethod
    def validate_transitions(
        options: Dict[str, Any], states: Tuple[StateID, ...], require_arrows: bool
    ) -> Mapping:
        transitions = options.get("transitions")
        if transitions is None:
            raise InvalidOptionsError("`transitions` option is required")
        if not isinstance(transitions, Mapping):
            raise InvalidOptionsError("`transitions` option must be a mapping", transitions=transitions)

        normalized = {}
        for source, targets in transitions.items():
            if source not in states:
                raise InvalidOptionsError(
                    f"`transitions` references unknown source state: {source}",
                    source_state=source,
                    states=states,
                )
            if not isinstance(targets, Mapping):
                raise InvalidOptionsError(
                    f"`transitions` entry for `{source}` must be a mapping of target states",
                    source_state=source,
                )
            normalized[source] = MappingProxyType(
                {
                    target: _DefaultValidationRules._normalize_target(source, target, spec, states, require_arrows)
                    for target, spec in targets.items()
                }
            )
        return MappingProxyType(normalized)

    @staticmethod
    def _normalize_target(
        source: StateID, target: StateID, spec: Any, states: Tuple[StateID, ...], require_arrows: bool
    ) -> Any:
        if target not in states:
            raise InvalidOptionsError(
                f"`transitions` references unknown target state: {target}",
                source_state=source,
                target_state=target,
                states=states,
            )
        if not require_arrows:
            return resolve_edge(spec)
        if not isinstance(spec, Mapping):
            raise InvalidOptionsError(
                f"`transitions` entry from `{source}` to `{target}` must be a mapping of arrows",
                source_state=source,
                target_state=target,
            )
        return MappingProxyType({arrow: resolve_edge(edge) for arrow, edge in spec.items()})


def _as_identifiers(value: Any) -> Tuple[Any, ...]:
    """Turn a declared collection of identifiers into an ordered tuple."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise InvalidOptionsError(f"Expected a collection of identifiers, got {value!r}", value=value)
    return tuple(value)


def edge_count(options: MachineOptions) -> int:
    """Number of declared edges, used for diagnostics."""
    total = 0
    for targets in options.transitions.values():
        for leaf in targets.values():
            total += 1 if isinstance(leaf, Edge) else len(leaf)
    return total
