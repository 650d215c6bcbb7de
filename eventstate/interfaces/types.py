# eventstate/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Dict

StateID = str
TransitionID = str
EventParams = Dict[str, Any]

# Param keys reserved by the state machine
PARAM_CURRENT_STATE = "current_state"
PARAM_NEW_STATE = "new_state"

# Callback Types
Listener = Callable[[Any], None]
