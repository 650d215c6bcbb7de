# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def event_manager():
    """An in-process dispatcher with no listeners."""
    from eventstate.runtime.event_manager import EventManager

    return EventManager()


@pytest.fixture
def transitions():
    """A small order-processing transitions table."""
    return {
        "draft": ["submit"],
        "pending": ["approve", "cancel"],
        "approved": ["ship", "cancel"],
    }


@pytest.fixture
def machine_factory(event_manager, transitions):
    """Returns a factory function creating machines bound to the shared event manager."""
    from eventstate.core.state_machine import EventStateMachine

    def _factory(initial_state="draft", **kwargs):
        kwargs.setdefault("transitions", transitions)
        return EventStateMachine(event_manager, initial_state, **kwargs)

    return _factory


@pytest.fixture
def dummy_event():
    """A generic transition event for testing."""
    from eventstate.core.events import TransitionEvent

    return TransitionEvent("on_transition", "submit", target=None, params={"current_state": "draft"})


@pytest.fixture
def mock_dispatcher():
    """A dispatcher mock whose trigger does nothing."""
    dispatcher = MagicMock()
    dispatcher.trigger = MagicMock(return_value=None)
    return dispatcher


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from eventstate.core.errors import (
        BaseStateMachineError,
        ConfigurationError,
        CouldNotTransitionError,
        StateMachineError,
    )

    return (BaseStateMachineError, StateMachineError, CouldNotTransitionError, ConfigurationError)
