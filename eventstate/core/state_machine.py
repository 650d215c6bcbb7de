# eventstate/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
import string
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Tuple

from eventstate.core.errors import ConfigurationError, CouldNotTransitionError, StateMachineError
from eventstate.core.events import TransitionEventFactory
from eventstate.core.transitions import PossibleTransitions, as_possible_transitions
from eventstate.interfaces.protocols import EventDispatcher, EventFactory, TransitionEventProtocol
from eventstate.interfaces.types import (
    PARAM_CURRENT_STATE,
    PARAM_NEW_STATE,
    EventParams,
    StateID,
    TransitionID,
)

logger = logging.getLogger(__name__)

_EVENT_NAME_FIELDS = ("", "0", "transition")


def normalize_event_name_format(event_name_format: Optional[str]) -> Optional[str]:
    """
    Validate an event name format and convert a printf-style ``%s`` placeholder
    to ``{transition}``.

    :param event_name_format: The format, or None for the default.
    :return: The format in ``str.format`` syntax, or None.
    :raises ConfigurationError: If the format is not a string, mixes both
        placeholder styles, or uses a field other than ``{}``, ``{0}`` or
        ``{transition}``.
    """
    if event_name_format is None:
        return None
    if not isinstance(event_name_format, str):
        raise ConfigurationError("Event name format must be a string")

    fmt = event_name_format
    if "%s" in fmt:
        if "{" in fmt or "}" in fmt:
            raise ConfigurationError(f"Event name format {event_name_format!r} mixes %s and {{}} placeholders")
        fmt = fmt.replace("%%", "\0").replace("%s", "{transition}").replace("\0", "%")

    try:
        fields = [field for _, field, _, _ in string.Formatter().parse(fmt) if field is not None]
    except ValueError as e:
        raise ConfigurationError(f"Event name format {event_name_format!r} is malformed") from e

    for field in fields:
        if field not in _EVENT_NAME_FIELDS:
            raise ConfigurationError(
                f"Event name format {event_name_format!r} has unknown field {{{field}}}; "
                "only {}, {0} and {transition} are supported"
            )
    return fmt


class AbstractEventStateMachine(ABC):
    """
    Transition algorithm shared by event-driven state machines.

    A transition is applied by triggering a transition event. Unless a listener
    aborts the transition, the new state is committed after dispatch even if a
    listener raised; the listener error is then reported to the caller. Listeners
    that must prevent the state change should abort instead of raising.
    """

    def _transition(self, transition: TransitionID) -> None:
        event = self._get_transition_event(transition)
        dispatch_error: Optional[Exception] = None

        logger.debug("Triggering event %r for transition %r", event.name, transition)
        try:
            self._get_event_dispatcher().trigger(event)
        except Exception as e:
            logger.exception("Listener for transition %r raised", transition)
            dispatch_error = e

        if event.is_transition_aborted:
            logger.warning("Transition %r was aborted", transition)
            raise self._create_could_not_transition_error(
                f'Transition "{transition}" was aborted', transition
            ) from dispatch_error

        state = self._get_new_state(event)

        if state is None:
            raise self._create_state_machine_error(
                f'State after transition "{transition}" is null'
            ) from dispatch_error

        self._set_state(state)
        logger.debug("Transition %r committed state %r", transition, state)

        if dispatch_error is not None:
            raise self._create_state_machine_error(
                f'An event for transition "{transition}" raised an exception'
            ) from dispatch_error

    @abstractmethod
    def _get_event_dispatcher(self) -> EventDispatcher:
        """Retrieve the dispatcher used to trigger transition events."""

    @abstractmethod
    def _get_transition_event(self, transition: TransitionID) -> TransitionEventProtocol:
        """Build the event for a transition."""

    @abstractmethod
    def _get_new_state(self, event: TransitionEventProtocol) -> Optional[StateID]:
        """Resolve the state to commit after the event has been dispatched."""

    @abstractmethod
    def _set_state(self, state: StateID) -> None:
        """Commit a new state."""

    def _create_state_machine_error(self, message: str) -> StateMachineError:
        return StateMachineError(message, self)

    def _create_could_not_transition_error(
        self, message: str, transition: TransitionID
    ) -> CouldNotTransitionError:
        return CouldNotTransitionError(message, self, transition)


class EventStateMachine(AbstractEventStateMachine):
    """
    A readable, event-driven state machine.

    No internal state graph is kept: the new state is read from the
    ``new_state`` event param, falling back to the transition itself, so
    transitioning to a state named after the transition is the default and
    transitioning to the same state is valid.

    The possible transitions table only answers ``can_transition`` and
    ``get_possible_transitions`` queries; it does not restrict ``transition``.
    """

    DEFAULT_EVENT_NAME_FORMAT = "on_transition"
    PER_TRANSITION_EVENT_NAME_FORMAT = "on_{transition}_transition"

    def __init__(
        self,
        event_dispatcher: EventDispatcher,
        initial_state: StateID,
        transitions: Any = None,
        event_name_format: Optional[str] = None,
        target: Any = None,
        event_params: Optional[Mapping[str, Any]] = None,
        event_factory: Optional[EventFactory] = None,
    ) -> None:
        """
        :param event_dispatcher: Object with a ``trigger(event)`` method.
        :param initial_state: The state the machine starts in.
        :param transitions: Possible transitions per state; see PossibleTransitions.
        :param event_name_format: Format for event names; ``{transition}`` or ``{}``
            is replaced by the transition. A printf-style ``%s`` is
            accepted as well. Defaults to "on_transition".
        :param target: Opaque context attached to every event.
        :param event_params: Static params added to every event.
        :param event_factory: Factory for events; defaults to TransitionEventFactory.
        :raises ConfigurationError: If an argument is invalid.
        """
        if initial_state is None:
            raise ConfigurationError("Initial state must not be None")
        if not hasattr(event_dispatcher, "trigger"):
            raise ConfigurationError("Event dispatcher must provide a trigger(event) method")
        event_name_format = normalize_event_name_format(event_name_format)
        if event_params is not None and not isinstance(event_params, Mapping):
            raise ConfigurationError("Event params must be a mapping")

        self._event_dispatcher = event_dispatcher
        self._event_factory = event_factory or TransitionEventFactory()
        self._state = initial_state
        self._transitions = as_possible_transitions(transitions)
        self._event_name_format = event_name_format
        self._target = target
        self._event_params: EventParams = dict(event_params or {})

    @property
    def current_state(self) -> StateID:
        """Get the current state."""
        return self._state

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._event_dispatcher

    @property
    def possible_transitions(self) -> PossibleTransitions:
        return self._transitions

    @property
    def target(self) -> Any:
        return self._target

    @property
    def event_name_format(self) -> str:
        if self._event_name_format is None:
            return self.DEFAULT_EVENT_NAME_FORMAT
        return self._event_name_format

    @property
    def event_params(self) -> EventParams:
        """A copy of the static event params."""
        return dict(self._event_params)

    def get_state(self) -> StateID:
        """Return the current state."""
        return self._state

    def can_transition(self, transition: TransitionID) -> bool:
        """
        Check whether a transition is listed for the current state.

        :param transition: The transition to check.
        :return: True if the transition is possible, False otherwise, including
            when the current state has no entry in the table.
        """
        return self._transitions.has(self._state, transition)

    def get_possible_transitions(self) -> Tuple[TransitionID, ...]:
        """
        Return the transitions listed for the current state, or an empty tuple.
        """
        return self._transitions.get(self._state)

    def transition(self, transition: TransitionID) -> "EventStateMachine":
        """
        Apply a transition by triggering its event.

        :param transition: The transition to apply.
        :return: This machine, for chaining.
        :raises CouldNotTransitionError: If a listener aborted the transition.
            The state is unchanged and any listener error is the cause.
        :raises StateMachineError: If the resolved state is None (state
            unchanged), or if a listener raised and the transition was not
            aborted (state already changed).
        :raises ConfigurationError: If the event factory did not produce a
            transition event.
        """
        self._transition(transition)
        return self

    def _get_event_dispatcher(self) -> EventDispatcher:
        return self._event_dispatcher

    def _get_transition_event(self, transition: TransitionID) -> TransitionEventProtocol:
        return self._create_transition_event(
            self._generate_event_name(transition),
            transition,
            self._target,
            self._get_transition_event_params(transition),
        )

    def _generate_event_name(self, transition: TransitionID) -> str:
        return self.event_name_format.format(transition, transition=transition)

    def _get_transition_event_params(self, transition: TransitionID) -> EventParams:
        params = dict(self._event_params)
        params[PARAM_CURRENT_STATE] = self._state
        return params

    def _create_transition_event(
        self, name: str, transition: TransitionID, target: Any, params: EventParams
    ) -> TransitionEventProtocol:
        event = self._event_factory.make(
            {
                "name": name,
                "transition": transition,
                "target": target,
                "params": params,
            }
        )
        if not isinstance(event, TransitionEventProtocol):
            raise ConfigurationError("Created event instance is not a transition event")
        return event

    def _get_new_state(self, event: TransitionEventProtocol) -> Optional[StateID]:
        params = event.params
        if PARAM_NEW_STATE in params:
            return params[PARAM_NEW_STATE]
        return event.transition

    def _set_state(self, state: StateID) -> None:
        self._state = state

    def __repr__(self) -> str:
        return f"EventStateMachine(state={self._state!r})"
