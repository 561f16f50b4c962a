"""
Replay: fold an action sequence through a transition function.

Same actions -> same final state, for pure reducers.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
