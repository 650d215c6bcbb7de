# eventstate/runtime/event_manager.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Tuple

from eventstate.interfaces.types import Listener

logger = logging.getLogger(__name__)


class EventManager:
    """
    In-process event dispatcher. Listeners are attached per event name and
    invoked synchronously when an event with that name is triggered.

    Listeners run by descending priority, ties in registration order. Dispatch
    stops as soon as a listener stops propagation on the event. A listener that
    raises ends the dispatch and the error propagates to the caller of
    ``trigger``.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Tuple[int, int, Listener]]] = {}
        self._counter = itertools.count()

    def attach(self, event_name: str, listener: Listener, priority: int = 0) -> None:
        """
        Attach a listener to an event name.

        :param event_name: The event name to listen for.
        :param listener: Callable receiving the event.
        :param priority: Higher priority listeners run first.
        """
        if not callable(listener):
            raise TypeError("Listener must be callable")
        entries = self._listeners.setdefault(event_name, [])
        entries.append((-priority, next(self._counter), listener))
        entries.sort(key=lambda entry: (entry[0], entry[1]))
        logger.debug("Attached listener %r to %r (priority %d)", listener, event_name, priority)

    def detach(self, event_name: str, listener: Listener) -> bool:
        """
        Detach a listener from an event name.

        :return: True if the listener was attached, False otherwise.
        """
        entries = self._listeners.get(event_name)
        if not entries:
            return False
        for index, (_, _, attached) in enumerate(entries):
            if attached == listener:
                del entries[index]
                logger.debug("Detached listener %r from %r", listener, event_name)
                return True
        return False

    def clear_listeners(self, event_name: str) -> None:
        """Remove every listener attached to an event name."""
        self._listeners.pop(event_name, None)

    def listeners(self, event_name: str) -> List[Listener]:
        """Return the listeners for an event name, in invocation order."""
        return [listener for _, _, listener in self._listeners.get(event_name, [])]

    def trigger(self, event: Any) -> None:
        """
        Dispatch an event to the listeners attached to its name.

        :param event: An object with a ``name`` and an ``is_propagation_stopped`` flag.
        """
        for listener in self.listeners(event.name):
            if event.is_propagation_stopped:
                break
            listener(event)
