# eventstate/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from eventstate.interfaces.types import EventParams, TransitionID


@runtime_checkable
class TransitionEventProtocol(Protocol):
    """
    Transition event protocol for type checking.

    Attributes:
        name: Display name of the event, used by dispatchers to select listeners.
        transition: The transition that produced the event.
        target: Opaque context attached by the state machine.
        params: Mutable mapping shared by all listeners.
        is_propagation_stopped: True once a listener asked for no further dispatch.
        is_transition_aborted: True once a listener vetoed the transition.

    Runtime Invariants:
    - One event per transition attempt; events are never reused.
    - The same instance is handed to every listener, so mutations are visible
      to later listeners and to the state machine after dispatch.
    """

    name: str
    transition: TransitionID
    target: Any
    params: EventParams

    @property
    def is_propagation_stopped(self) -> bool: ...

    @property
    def is_transition_aborted(self) -> bool: ...

    def stop_propagation(self, flag: bool = True) -> Any: ...

    def abort_transition(self, abort: bool = True) -> Any: ...


@runtime_checkable
class EventDispatcher(Protocol):
    """
    Dispatcher protocol consumed by the state machine.

    Methods:
        trigger(event): Invoke the listeners for the event synchronously, in order.

    Error Handling:
    - Implementations may raise; the state machine captures the error and
      reports it after deciding whether the transition was aborted.
    """

    def trigger(self, event: TransitionEventProtocol) -> Any: ...


@runtime_checkable
class EventFactory(Protocol):
    """
    Factory protocol for transition events.

    Methods:
        make(descriptor): Build an event from a mapping with the keys
            ``name``, ``transition``, ``target`` and ``params``.
    """

    def make(self, descriptor: Optional[Mapping[str, Any]] = None) -> Any: ...
