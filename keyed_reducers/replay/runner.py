"""
Replay runner: apply actions to a transition function in order.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from ..core.actions import Action, ActionTypes
from ..core.state import State


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying actions
        applied: Number of actions applied (INIT not counted)
        changed: Number of transitions that returned a new State object
    """
    state: State
    applied: int
    changed: int


def replay(
    transition: Callable[[Optional[State], Any], State],
    actions: Iterable[Any],
    state: Optional[State] = None,
    until: Optional[int] = None,
) -> ReplayResult:
    """
    Replay actions to reconstruct state.

    Args:
        transition: Root reducer (e.g., from combine())
        actions: Actions in dispatch order
        state: Starting state (None = deliver INIT first)
        until: Stop after this many actions (None = all)

    Returns:
        ReplayResult with final state and counts
    """
    if state is None:
        state = transition(None, Action(type=ActionTypes.INIT))

    applied = 0
    changed = 0
    for action in actions:
        if until is not None and applied >= until:
            break
        nxt = transition(state, action)
        if nxt is not state:
            changed += 1
        state = nxt
        applied += 1

    return ReplayResult(state=state, applied=applied, changed=changed)
