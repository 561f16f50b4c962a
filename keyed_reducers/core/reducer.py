"""
Reducer: Pure slice transition functions.

A reducer maps (slice_state, action) to the next slice state. Contract:
- Never return ABSENT
- When handed ABSENT, return the initial slice
- For an unknown action, return the input slice unchanged (same object)

The contract concerns behavior, so it is checked at composition time by
probing (see keyed_reducers.validation), not by types.
"""

from typing import Any, Callable, Dict, Optional

from .actions import action_type_of
from .state import ABSENT

ReducerFunction = Callable[[Any, Any], Any]

# Handler signature: (current_slice, action) -> new_slice
Handler = Callable[[Any, Any], Any]


class Reducer:
    """
    Registry of action handlers for one slice.

    Satisfies the reducer contract by construction: ABSENT input becomes the
    initial slice, unregistered action types pass the slice through.

    Usage:
        counter = Reducer(initial=0)
        counter.register("INC", lambda n, action: n + 1)
        combine({"counter": counter})
    """

    def __init__(self, initial: Any = None) -> None:
        if initial is ABSENT:
            raise ValueError("Reducer initial state may not be ABSENT")
        self.initial = initial
        self._handlers: Dict[str, Handler] = {}

    def register(self, action_type: str, handler: Handler) -> None:
        """
        Register action handler.

        Args:
            action_type: Action type string
            handler: Pure function (current_slice, action) -> new_slice
        """
        self._handlers[action_type] = handler

    def on(self, action_type: str) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""

        def decorator(handler: Handler) -> Handler:
            self.register(action_type, handler)
            return handler

        return decorator

    def handler_for(self, action_type: str) -> Optional[Handler]:
        return self._handlers.get(action_type)

    def __call__(self, state: Any, action: Any) -> Any:
        if state is ABSENT:
            state = self.initial
        handler = self._handlers.get(action_type_of(action))
        if handler is None:
            return state
        return handler(state, action)
