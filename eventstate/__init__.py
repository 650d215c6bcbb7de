"""eventstate: event-driven finite state machine primitive

A state machine holds one current state and moves to a new state by triggering
a transition event. Listeners attached to the event dispatcher may pick the new
state through the ``new_state`` event param, or abort the transition.
"""

from eventstate.core.errors import (
    BaseStateMachineError,
    ConfigurationError,
    CouldNotTransitionError,
    StateMachineError,
)
from eventstate.core.events import TransitionEvent, TransitionEventFactory
from eventstate.core.factory import StateMachineFactory
from eventstate.core.state_machine import AbstractEventStateMachine, EventStateMachine
from eventstate.core.transitions import PossibleTransitions, UnrestrictedTransitions
from eventstate.interfaces.types import PARAM_CURRENT_STATE, PARAM_NEW_STATE
from eventstate.runtime.event_manager import EventManager

__version__ = "0.1.0"

__all__ = [
    "AbstractEventStateMachine",
    "BaseStateMachineError",
    "ConfigurationError",
    "CouldNotTransitionError",
    "EventManager",
    "EventStateMachine",
    "PARAM_CURRENT_STATE",
    "PARAM_NEW_STATE",
    "PossibleTransitions",
    "StateMachineError",
    "StateMachineFactory",
    "TransitionEvent",
    "TransitionEventFactory",
    "UnrestrictedTransitions",
]
