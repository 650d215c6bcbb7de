# eventstate/core/factory.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Mapping, Optional

from eventstate.core.errors import ConfigurationError
from eventstate.core.events import TransitionEventFactory
from eventstate.core.state_machine import EventStateMachine, normalize_event_name_format
from eventstate.interfaces.protocols import EventDispatcher, EventFactory
from eventstate.runtime.event_manager import EventManager


class StateMachineFactory:
    """
    Creates EventStateMachine instances from configuration mappings.

    Defaults given to the factory are used for every machine it makes, unless
    the configuration passed to ``make`` overrides them.
    """

    CFG_EVENT_MANAGER = "event_manager"
    CFG_EVENT_FACTORY = "event_factory"
    CFG_INITIAL_STATE = "initial_state"
    CFG_TRANSITIONS = "transitions"
    CFG_EVENT_NAME_FORMAT = "event_name_format"
    CFG_EVENT_TARGET = "event_target"
    CFG_EVENT_PARAMS = "event_params"

    def __init__(
        self,
        event_manager: Optional[EventDispatcher] = None,
        event_factory: Optional[EventFactory] = None,
        event_name_format: Optional[str] = None,
        event_params: Optional[Mapping[str, Any]] = None,
        event_target: Any = None,
    ) -> None:
        """
        :param event_manager: Default dispatcher for created machines.
        :param event_factory: Default event factory for created machines.
        :param event_name_format: Default event name format.
        :param event_params: Default static event params.
        :param event_target: Default event target.
        """
        event_name_format = normalize_event_name_format(event_name_format)
        if event_params is not None and not isinstance(event_params, Mapping):
            raise ConfigurationError("Event params must be a mapping")

        self._event_manager = event_manager
        self._event_factory = event_factory
        self._event_name_format = event_name_format
        self._event_params = dict(event_params) if event_params is not None else None
        self._event_target = event_target

    def make(self, config: Optional[Mapping[str, Any]] = None) -> EventStateMachine:
        """
        Create a state machine.

        :param config: Mapping with the required keys ``initial_state`` and
            ``transitions``, and optional overrides for the factory defaults.
        :raises ConfigurationError: If a required key is missing or a value is invalid.
        """
        config = config or {}
        for key in (self.CFG_INITIAL_STATE, self.CFG_TRANSITIONS):
            if key not in config:
                raise ConfigurationError(f'State machine config is missing the "{key}" key')

        event_manager = config.get(self.CFG_EVENT_MANAGER, self._event_manager)
        event_factory = config.get(self.CFG_EVENT_FACTORY, self._event_factory)

        return EventStateMachine(
            event_dispatcher=event_manager if event_manager is not None else EventManager(),
            initial_state=config[self.CFG_INITIAL_STATE],
            transitions=config[self.CFG_TRANSITIONS],
            event_name_format=config.get(self.CFG_EVENT_NAME_FORMAT, self._event_name_format),
            target=config.get(self.CFG_EVENT_TARGET, self._event_target),
            event_params=config.get(self.CFG_EVENT_PARAMS, self._event_params),
            event_factory=event_factory if event_factory is not None else TransitionEventFactory(),
        )
