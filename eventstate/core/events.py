# eventstate/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Mapping, Optional

from eventstate.core.errors import ConfigurationError
from eventstate.interfaces.types import EventParams, TransitionID


class TransitionEvent:
    """
    An event triggered in relation to a transition. A single instance is passed
    to every listener in turn; listeners may abort the transition, stop
    propagation or edit the params (e.g. to choose the new state).
    """

    def __init__(
        self,
        name: str,
        transition: TransitionID,
        target: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        :param name: The event name.
        :param transition: The transition that produced this event.
        :param target: Opaque context, usually the subject the machine models.
        :param params: Initial event params. The mapping is copied.
        """
        self._name = name
        self._transition = transition
        self._target = target
        self._params: EventParams = dict(params) if params else {}
        self._propagation_stopped = False
        self._transition_aborted = False

    @property
    def name(self) -> str:
        """The name of the event."""
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def transition(self) -> TransitionID:
        """The transition related to this event."""
        return self._transition

    @property
    def target(self) -> Any:
        """The target context object."""
        return self._target

    @target.setter
    def target(self, target: Any) -> None:
        self._target = target

    @property
    def params(self) -> EventParams:
        """The live params dictionary."""
        return self._params

    @params.setter
    def params(self, params: Mapping[str, Any]) -> None:
        self._params = dict(params)

    def get_param(self, key: str) -> Any:
        """
        Retrieve a single param.

        :param key: The param key.
        :return: The param value, or None if the key is absent.
        """
        return self._params.get(key)

    @property
    def is_propagation_stopped(self) -> bool:
        """Whether a listener asked that no further listeners run."""
        return self._propagation_stopped

    def stop_propagation(self, flag: bool = True) -> "TransitionEvent":
        """
        Set the stopped propagation flag.

        :param flag: True to stop propagation, False to resume it.
        :return: This event, for chaining.
        """
        self._propagation_stopped = bool(flag)
        return self

    @property
    def is_transition_aborted(self) -> bool:
        """Whether a listener vetoed the transition."""
        return self._transition_aborted

    def abort_transition(self, abort: bool = True) -> "TransitionEvent":
        """
        Set the aborted transition flag. A later listener may clear it again;
        stop propagation as well to guarantee the abort sticks.

        :param abort: True to abort, False to un-abort.
        :return: This event, for chaining.
        """
        self._transition_aborted = bool(abort)
        return self

    def __repr__(self) -> str:
        return (
            f"TransitionEvent(name={self._name!r}, transition={self._transition!r}, "
            f"aborted={self._transition_aborted}, stopped={self._propagation_stopped})"
        )


class TransitionEventFactory:
    """
    Creates TransitionEvent instances from descriptor mappings.
    """

    def make(self, descriptor: Optional[Mapping[str, Any]] = None) -> TransitionEvent:
        """
        Build an event from a descriptor.

        :param descriptor: Mapping with the keys ``name`` and ``transition``, and
            optionally ``target`` and ``params``.
        :raises ConfigurationError: If a required key is missing.
        """
        descriptor = descriptor or {}
        missing = [key for key in ("name", "transition") if key not in descriptor]
        if missing:
            raise ConfigurationError(f"Event descriptor is missing required keys: {', '.join(missing)}")

        params: Dict[str, Any] = dict(descriptor.get("params") or {})
        return TransitionEvent(
            name=descriptor["name"],
            transition=descriptor["transition"],
            target=descriptor.get("target"),
            params=params,
        )
