"""
Action model for state transitions.

Actions are immutable records with a `type` discriminant.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .ids import reserved_type


@dataclass(frozen=True)
class Action:
    """
    Immutable action record.

    Fields:
        type: Action type (e.g., "INC", "todos/added")
        payload: Action-specific data
        meta: Metadata (source, reason, etc.)
    """
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Action":
        if "type" not in data:
            raise ValueError("Action requires a 'type' field")
        return Action(
            type=str(data["type"]),
            payload=dict(data.get("payload") or {}),
            meta=dict(data.get("meta") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "payload": dict(self.payload), "meta": dict(self.meta)}


class ActionTypes:
    """
    Reserved action types. Application reducers must not handle these.

    INIT is delivered by the host dispatch loop on startup. Probe types are
    used only by shape validation.
    """
    INIT = reserved_type("INIT")

    @staticmethod
    def probe_unknown() -> str:
        return reserved_type("PROBE_UNKNOWN_ACTION", randomized=True)


def action_type_of(action: Any) -> str:
    """
    Read the discriminant of an Action or a plain mapping with a "type" entry.

    Raises:
        TypeError: If the object carries no type
    """
    if isinstance(action, Action):
        return action.type
    if isinstance(action, Mapping) and "type" in action:
        return str(action["type"])
    action_type = getattr(action, "type", None)
    if action_type is None:
        raise TypeError(f"Action has no 'type': {action!r}")
    return str(action_type)
