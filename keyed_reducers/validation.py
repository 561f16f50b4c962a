"""
Shape validation for reducer mappings.

Each reducer is probed twice with reserved actions before any real dispatch:
- INIT with ABSENT input must yield an initial slice (ShapeError otherwise)
- A random unknown type with ABSENT input must also yield a slice
  (ShapeWarning otherwise, ShapeError in strict mode)

Reducers must be pure for the probes to mean anything.
"""

import warnings
from typing import Any, Mapping

from .core.actions import Action, ActionTypes
from .core.errors import ShapeError, ShapeWarning
from .core.state import ABSENT
from .logging_config import get_logger

logger = get_logger(__name__)


def assert_reducer_shapes(reducers: Mapping[str, Any], strict: bool = False) -> None:
    """
    Validate every reducer in the mapping.

    Args:
        reducers: Mapping of key -> reducer function
        strict: Treat an ABSENT result for unknown actions as fatal

    Raises:
        ShapeError: If a key is not a string, a reducer is not callable,
            or a reducer cannot produce its initial slice
    """
    for key, reducer in reducers.items():
        if not isinstance(key, str):
            raise ShapeError(str(key), f"Reducer key must be a string, got {type(key).__name__}: {key!r}")
        if not callable(reducer):
            raise ShapeError(key, f'No reducer provided for key "{key}": {reducer!r} is not callable')

        initial = reducer(ABSENT, Action(type=ActionTypes.INIT))
        if initial is ABSENT:
            raise ShapeError(
                key,
                f'Reducer "{key}" returned ABSENT during initialization. '
                "If the state passed to the reducer is ABSENT, you must explicitly "
                "return the initial state. The initial state may not be ABSENT. "
                "If you don't want to set a value for this reducer, you can use None instead of ABSENT.",
            )

        probe_type = ActionTypes.probe_unknown()
        if reducer(ABSENT, Action(type=probe_type)) is ABSENT:
            message = (
                f'Reducer "{key}" returned ABSENT when probed with a random type. '
                f'Don\'t try to handle "{ActionTypes.INIT}" or other actions in the '
                '"@@keyed_reducers/" namespace. They are considered private. Instead, you '
                "must return the current state for any unknown actions, unless it is "
                "ABSENT, in which case you must return the initial state, regardless of "
                "the action type."
            )
            if strict:
                raise ShapeError(key, message)
            logger.debug("Shape probe for %s returned ABSENT on unknown action", key)
            warnings.warn(ShapeWarning(key, message), stacklevel=3)
