# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def error_classes():
    """Provides the error taxonomy for quick reference."""
    from arrowstate.core.errors import (
        ArrowNotAvailableError,
        ConcurrentTransitionError,
        InvalidOptionsError,
        NoArrowsError,
        StateMachineError,
        UnknownArrowError,
        UnknownStateError,
        UnreachableStateError,
    )

    return (
        StateMachineError,
        InvalidOptionsError,
        ConcurrentTransitionError,
        UnreachableStateError,
        UnknownStateError,
        UnknownArrowError,
        NoArrowsError,
        ArrowNotAvailableError,
    )


@pytest.fixture
def validator():
    """A default Validator."""
    from arrowstate.core.validation import Validator

    return Validator()


@pytest.fixture
def machine_factory():
    """Returns a factory building a two-state a -> b machine with the given edge on arrow `ab`."""
    from arrowstate.core.state_machine import StateMachine

    def _factory(edge=True, **overrides):
        options = {
            "states": ["a", "b"],
            "arrows": ["ab"],
            "transitions": {"a": {"b": {"ab": edge}}},
        }
        options.update(overrides)
        return StateMachine(options)

    return _factory


@pytest.fixture
def mock_action():
    """An action spy returning 42."""
    return MagicMock(return_value=42)
