"""
Exception and warning types for keyed reducer composition.
"""

from typing import Sequence


class ReducerError(Exception):
    """Base class for reducer composition errors."""
    pass


class ShapeError(ReducerError):
    """Raised at composition time when a reducer breaks its contract."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class UndefinedStateError(ReducerError):
    """Raised at dispatch time when a reducer returns ABSENT for a real action."""

    def __init__(self, key: str, action_type: str) -> None:
        super().__init__(
            f'Given action "{action_type}", reducer "{key}" returned ABSENT. '
            "To ignore an action, you must explicitly return the previous state. "
            "If you want this reducer to hold no value, you can return None instead of ABSENT."
        )
        self.key = key
        self.action_type = action_type


class InvalidStateError(ReducerError, TypeError):
    """Raised when the prior state handed to a combined reducer is not a State."""
    pass


class ShapeWarning(UserWarning):
    """Reducer returned ABSENT for an unknown action during shape validation."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class UnexpectedKeyWarning(UserWarning):
    """Prior state holds keys that no reducer owns."""

    def __init__(self, keys: Sequence[str], expected: Sequence[str]) -> None:
        found = ", ".join(f'"{k}"' for k in keys)
        known = ", ".join(f'"{k}"' for k in expected) or "(none)"
        super().__init__(
            f"Unexpected keys {found} found in previous state received by the reducer. "
            f"Expected to find one of the known reducer keys instead: {known}. "
            "Unexpected keys are carried through unchanged."
        )
        self.keys = tuple(keys)
        self.expected = tuple(expected)
