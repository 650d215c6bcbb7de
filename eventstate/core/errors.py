# eventstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Optional


class BaseStateMachineError(Exception):
    """
    Base exception class for errors raised in relation to a state machine.
    Carries a reference back to the machine that erred, for diagnostics.
    """

    def __init__(self, message: str = "", state_machine: Any = None) -> None:
        """
        :param message: The error message.
        :param state_machine: The state machine that erred, if any.
        """
        super().__init__(message)
        self._message = message
        self._state_machine = state_machine

    @property
    def message(self) -> str:
        """The error message."""
        return self._message

    @property
    def state_machine(self) -> Any:
        """The state machine that erred, or None."""
        return self._state_machine

    @property
    def cause(self) -> Optional[BaseException]:
        """The chained exception, as set by ``raise ... from``."""
        return self.__cause__


class StateMachineError(BaseStateMachineError):
    """
    Raised when a transition could not be resolved, or when a listener failed
    after the new state had already been committed.
    """


class CouldNotTransitionError(BaseStateMachineError):
    """
    Raised when a transition was vetoed by a listener. The machine state is
    left unchanged.
    """

    def __init__(self, message: str = "", state_machine: Any = None, transition: Any = None) -> None:
        """
        :param message: The error message.
        :param state_machine: The state machine that erred, if any.
        :param transition: The transition that failed.
        """
        super().__init__(message, state_machine)
        self._transition = transition

    @property
    def transition(self) -> Any:
        """The transition that failed."""
        return self._transition


class ConfigurationError(BaseStateMachineError, ValueError):
    """
    Raised when a state machine, factory or event is built from invalid input.
    """
