# eventstate/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Tuple

from eventstate.core.errors import ConfigurationError
from eventstate.interfaces.types import StateID, TransitionID


class PossibleTransitions:
    """
    Read-only lookup from a state to the ordered transitions that may be
    attempted from it. Used to answer "can I attempt this transition" queries;
    it never gates the transition algorithm itself.

    A lookup for a state that has no entry yields an empty tuple rather than an
    error, so callers can probe any state.
    """

    def __init__(self, source: Any = None) -> None:
        """
        :param source: A mapping of states to transition lists, any object
            supporting ``obj[state]``, a plain object whose attributes are named
            after states, or a callable ``state -> transitions``. None means an
            empty table. An object that is both subscriptable and callable is
            looked up with ``obj[state]``.
        :raises ConfigurationError: If the source cannot be used for lookups.
        """
        self._source = source
        self._lookup = _LookupAdapter.adapt(source)

    def get(self, state: StateID) -> Tuple[TransitionID, ...]:
        """
        Return the transitions registered for a state.

        :param state: The state to look up.
        :return: The transitions, in configured order, or an empty tuple.
        """
        try:
            value = self._lookup(state)
        except LookupError:
            return ()
        return _normalize_transitions(value)

    def has(self, state: StateID, transition: TransitionID) -> bool:
        """
        Check whether a transition is registered for a state.
        """
        return transition in self.get(state)

    def __repr__(self) -> str:
        return f"PossibleTransitions({self._source!r})"


class UnrestrictedTransitions(PossibleTransitions):
    """
    Table-free variant: every transition is allowed from every state. No list
    of transitions is known, so ``get`` always returns an empty tuple.
    """

    def __init__(self) -> None:
        super().__init__(None)

    def has(self, state: StateID, transition: TransitionID) -> bool:
        return True

    def __repr__(self) -> str:
        return "UnrestrictedTransitions()"


def as_possible_transitions(source: Any) -> PossibleTransitions:
    """
    Wrap a lookup source in a PossibleTransitions table, unless it already is one.
    """
    if isinstance(source, PossibleTransitions):
        return source
    return PossibleTransitions(source)


def _normalize_transitions(value: Any) -> Tuple[TransitionID, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    try:
        return tuple(value)
    except TypeError:
        return (value,)


class _LookupAdapter:
    """
    Internal helper turning the supported source kinds into a single
    ``state -> value`` callable that raises LookupError on not-found.
    """

    @staticmethod
    def adapt(source: Any) -> Callable[[StateID], Any]:
        if source is None:
            return _LookupAdapter._empty
        if isinstance(source, Mapping):
            return lambda state: source[state]
        if isinstance(source, (str, bytes, list, tuple, set, frozenset)):
            raise ConfigurationError(f"Possible transitions must be a mapping of states, got {type(source).__name__}")
        if hasattr(source, "__getitem__"):
            return lambda state: source[state]
        if callable(source):
            return _LookupAdapter._from_callable(source)
        if hasattr(source, "__dict__"):
            return _LookupAdapter._from_attributes(source)
        raise ConfigurationError(f"Possible transitions source of type {type(source).__name__} is not a container")

    @staticmethod
    def _empty(state: StateID) -> Any:
        raise KeyError(state)

    @staticmethod
    def _from_callable(fn: Callable[[StateID], Any]) -> Callable[[StateID], Any]:
        def lookup(state: StateID) -> Any:
            value = fn(state)
            if value is None:
                raise KeyError(state)
            return value

        return lookup

    @staticmethod
    def _from_attributes(obj: Any) -> Callable[[StateID], Any]:
        def lookup(state: StateID) -> Any:
            attributes = vars(obj)
            key = str(state)
            if key not in attributes:
                raise KeyError(state)
            return attributes[key]

        return lookup
