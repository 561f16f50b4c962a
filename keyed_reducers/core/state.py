"""
State model for keyed reducer composition.

State is a persistent keyed container. Every "mutation" returns a new
State that shares all untouched slices with the original, so reference
comparison is a correct "did anything change" test.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from pyrsistent import PMap, pmap


class _Absent:
    """Marker for a missing slice. Distinct from every stored value, None included."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Absent":
        return self


ABSENT = _Absent()


@dataclass(frozen=True)
class State:
    """
    Immutable keyed container.

    Fields:
        slices: Persistent map of key -> slice state

    Use set() or evolver() to derive new states. The original is never modified.
    """
    slices: PMap = field(default_factory=pmap)

    @staticmethod
    def empty() -> "State":
        return State()

    @staticmethod
    def from_dict(data: Optional[Mapping[str, Any]]) -> "State":
        data = data or {}
        for key, value in data.items():
            if value is ABSENT:
                raise ValueError(f"Cannot store ABSENT under key: {key}")
        return State(slices=pmap(dict(data)))

    def get(self, key: str) -> Any:
        """
        Get slice by key.

        Returns:
            Slice state or ABSENT if the key is not present
        """
        return self.slices.get(key, ABSENT)

    def set(self, key: str, value: Any) -> "State":
        """
        Create new state with one slice replaced.

        Args:
            key: Slice key
            value: New slice state (must not be ABSENT)

        Returns:
            New State sharing every other slice with this one
        """
        if value is ABSENT:
            raise ValueError(f"Cannot store ABSENT under key: {key}")
        return State(slices=self.slices.set(key, value))

    def keys(self) -> List[str]:
        return list(self.slices.keys())

    def evolver(self) -> "StateEvolver":
        return StateEvolver(self)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.slices)

    def __contains__(self, key: object) -> bool:
        return key in self.slices

    def __len__(self) -> int:
        return len(self.slices)

    def __iter__(self) -> Iterator[str]:
        return iter(self.slices)


class StateEvolver:
    """
    Batched writer over a State.

    Collects several slice updates and produces one new State. If nothing
    was set, persistent() hands back the original State object.
    """

    def __init__(self, origin: State) -> None:
        self._origin = origin
        self._evolver = origin.slices.evolver()

    def set(self, key: str, value: Any) -> "StateEvolver":
        if value is ABSENT:
            raise ValueError(f"Cannot store ABSENT under key: {key}")
        self._evolver.set(key, value)
        return self

    def is_dirty(self) -> bool:
        return self._evolver.is_dirty()

    def persistent(self) -> State:
        if not self._evolver.is_dirty():
            return self._origin
        return State(slices=self._evolver.persistent())
