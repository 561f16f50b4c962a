"""
Keyed Reducers

Compose keyed reducers into one root reducer over a persistent,
structurally-shared state container.
"""

from .core import (
    ABSENT,
    Action,
    ActionTypes,
    Reducer,
    ShapeError,
    ShapeWarning,
    State,
    UndefinedStateError,
    UnexpectedKeyWarning,
)
from .combine import CombinedReducer, combine
from .validation import assert_reducer_shapes

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "Action",
    "ActionTypes",
    "CombinedReducer",
    "Reducer",
    "ShapeError",
    "ShapeWarning",
    "State",
    "UndefinedStateError",
    "UnexpectedKeyWarning",
    "assert_reducer_shapes",
    "combine",
]
