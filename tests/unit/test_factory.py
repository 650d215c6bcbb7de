# tests/unit/test_factory.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from eventstate.core.errors import ConfigurationError
from eventstate.core.events import TransitionEvent, TransitionEventFactory
from eventstate.core.factory import StateMachineFactory
from eventstate.core.state_machine import EventStateMachine
from eventstate.runtime.event_manager import EventManager


def test_make_with_required_config(transitions):
    m = StateMachineFactory().make({"initial_state": "draft", "transitions": transitions})
    assert isinstance(m, EventStateMachine)
    assert m.get_state() == "draft"
    assert m.get_possible_transitions() == ("submit",)
    assert isinstance(m.event_dispatcher, EventManager)
    assert m.event_name_format == "on_transition"


@pytest.mark.parametrize("config", [None, {}, {"initial_state": "draft"}, {"transitions": {}}])
def test_make_missing_required_keys(config):
    with pytest.raises(ConfigurationError):
        StateMachineFactory().make(config)


def test_make_uses_factory_defaults(mock_dispatcher, transitions):
    event_factory = TransitionEventFactory()
    factory = StateMachineFactory(
        event_manager=mock_dispatcher,
        event_factory=event_factory,
        event_name_format="on_{transition}",
        event_params={"tenant": "acme"},
        event_target="order-1",
    )
    m = factory.make({"initial_state": "draft", "transitions": transitions})
    assert m.event_dispatcher is mock_dispatcher
    assert m.event_name_format == "on_{transition}"
    assert m.event_params == {"tenant": "acme"}
    assert m.target == "order-1"

    m.transition("submit")
    event = mock_dispatcher.trigger.call_args[0][0]
    assert event.name == "on_submit"
    assert event.target == "order-1"


def test_make_config_overrides_defaults(mock_dispatcher, transitions):
    override = MagicMock()
    event_factory = MagicMock()
    event_factory.make.side_effect = lambda descriptor: TransitionEvent(**descriptor)
    factory = StateMachineFactory(event_manager=mock_dispatcher, event_target="default")
    m = factory.make(
        {
            "initial_state": "draft",
            "transitions": transitions,
            "event_manager": override,
            "event_factory": event_factory,
            "event_name_format": "{}",
            "event_target": "order-2",
            "event_params": {"channel": "web"},
        }
    )
    m.transition("submit")
    override.trigger.assert_called_once()
    mock_dispatcher.trigger.assert_not_called()
    event_factory.make.assert_called_once()
    event = override.trigger.call_args[0][0]
    assert event.name == "submit"
    assert event.target == "order-2"
    assert event.params == {"channel": "web", "current_state": "draft"}


def test_factory_creates_independent_machines(transitions):
    factory = StateMachineFactory()
    first = factory.make({"initial_state": "draft", "transitions": transitions})
    second = factory.make({"initial_state": "draft", "transitions": transitions})
    first.transition("submit")
    assert second.get_state() == "draft"
    assert first.event_dispatcher is not second.event_dispatcher


def test_factory_rejects_invalid_defaults():
    with pytest.raises(ConfigurationError):
        StateMachineFactory(event_name_format=123)
    with pytest.raises(ConfigurationError):
        StateMachineFactory(event_params="tenant=acme")


def test_factory_rejects_unknown_format_fields():
    with pytest.raises(ConfigurationError):
        StateMachineFactory(event_name_format="on_{state}_transition")


def test_factory_translates_printf_style_format(transitions):
    m = StateMachineFactory(event_name_format="on_%s_transition").make(
        {"initial_state": "draft", "transitions": transitions}
    )
    assert m.event_name_format == "on_{transition}_transition"
