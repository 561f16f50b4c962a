"""
Combiner: compose keyed reducers into one root reducer.

The combined reducer delegates each key to its own reducer and detects
which slices changed. When no slice changed and no key had to be
synthesized it returns the prior State object itself, so consumers can use
`is` as a correct and cheap change test. Otherwise it returns a new State
that shares every unchanged slice with the prior one.
"""

import itertools
import warnings
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

from .config import CombineConfig
from .core.actions import action_type_of
from .core.errors import InvalidStateError, UndefinedStateError, UnexpectedKeyWarning
from .core.reducer import ReducerFunction
from .core.state import ABSENT, State
from .logging_config import get_logger
from .validation import assert_reducer_shapes

_instance_counter = itertools.count(1)


class CombinedReducer:
    """
    Root reducer over a fixed set of keyed reducers.

    Built by combine(). The reducer set is frozen at composition time;
    compose again to change it. Calls must be serialized by the caller.
    """

    def __init__(
        self,
        reducers: Mapping[str, ReducerFunction],
        config: CombineConfig,
        default_state: Callable[[], State] = State.empty,
    ) -> None:
        self._reducers: Tuple[Tuple[str, ReducerFunction], ...] = tuple(reducers.items())
        self._config = config
        self._default_state = default_state
        # One-shot per instance, never shared across compositions
        self._unexpected_keys_checked = False
        self.instance_id = f"combined-{next(_instance_counter)}"
        self._logger = get_logger(__name__, instance_id=self.instance_id)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self._reducers)

    @property
    def reducers(self) -> Mapping[str, ReducerFunction]:
        return MappingProxyType(dict(self._reducers))

    def __call__(self, state: Optional[State], action: Any) -> State:
        """
        Apply action to every slice.

        Args:
            state: Prior state, or None/ABSENT to start from the default state
            action: Action record (Action or mapping with a "type" entry)

        Returns:
            The prior State object when nothing changed, otherwise a new State

        Raises:
            UndefinedStateError: If a reducer returns ABSENT
            InvalidStateError: If state is not a State
        """
        if state is None or state is ABSENT:
            state = self._default_state()
        if not isinstance(state, State):
            raise InvalidStateError(
                f"The previous state received by the reducer is of unexpected type "
                f"{type(state).__name__}. Expected a State with keys: {', '.join(self.keys)}"
            )

        if not self._unexpected_keys_checked:
            self._unexpected_keys_checked = True
            if self._config.warn_unexpected_keys:
                self._warn_unexpected_keys(state)

        has_changed = False
        next_state = state.evolver()
        for key, reducer in self._reducers:
            previous = state.get(key)
            nxt = reducer(previous, action)
            if nxt is ABSENT:
                error = UndefinedStateError(key, action_type_of(action))
                self._logger.error(str(error))
                raise error
            # A synthesized key counts as changed whatever its value
            if nxt is not previous or key not in state:
                has_changed = True
                next_state.set(key, nxt)

        if not has_changed:
            return state
        return next_state.persistent()

    def _warn_unexpected_keys(self, state: State) -> None:
        known = set(self.keys)
        unexpected = sorted(k for k in state.keys() if k not in known)
        if not unexpected:
            return
        self._logger.warning("Unexpected keys in previous state: %s", ", ".join(unexpected))
        warnings.warn(UnexpectedKeyWarning(unexpected, self.keys), stacklevel=3)

    def __repr__(self) -> str:
        return f"CombinedReducer(keys={list(self.keys)!r}, instance_id={self.instance_id!r})"


def combine(
    reducers: Mapping[str, ReducerFunction],
    config: Optional[CombineConfig] = None,
    default_state: Callable[[], State] = State.empty,
) -> CombinedReducer:
    """
    Compose a mapping of key -> reducer into one root reducer.

    Every reducer is shape-validated once, here, before any dispatch.

    Args:
        reducers: Ordered mapping of slice key -> reducer function
        config: Composition settings (default: CombineConfig.from_env())
        default_state: Factory for the state used when none is supplied

    Returns:
        CombinedReducer callable as (state, action) -> State

    Raises:
        ShapeError: If any reducer fails validation

    Example:
        root = combine({"counter": counter})
        s0 = root(None, Action(ActionTypes.INIT))
        s1 = root(s0, Action("NOOP"))
        assert s1 is s0
    """
    if config is None:
        config = CombineConfig.from_env()

    assert_reducer_shapes(reducers, strict=config.strict_shapes)

    combined = CombinedReducer(reducers, config=config, default_state=default_state)
    combined._logger.debug("Composed reducer over keys: %s", ", ".join(combined.keys))
    return combined
