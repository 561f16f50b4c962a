"""
Core primitives for keyed reducer composition.

This module provides:
- State: Persistent keyed container (pyrsistent PMap underneath)
- ABSENT: Sentinel returned for missing keys
- Action: Immutable action record
- Reducer: Handler registry satisfying the reducer contract
- Errors: Shape/undefined-state errors and advisory warnings
"""

from .state import ABSENT, State, StateEvolver
from .actions import Action, ActionTypes, action_type_of
from .reducer import Reducer, ReducerFunction
from .errors import (
    ReducerError,
    ShapeError,
    UndefinedStateError,
    InvalidStateError,
    ShapeWarning,
    UnexpectedKeyWarning,
)

__all__ = [
    "ABSENT",
    "State",
    "StateEvolver",
    "Action",
    "ActionTypes",
    "action_type_of",
    "Reducer",
    "ReducerFunction",
    "ReducerError",
    "ShapeError",
    "UndefinedStateError",
    "InvalidStateError",
    "ShapeWarning",
    "UnexpectedKeyWarning",
]
