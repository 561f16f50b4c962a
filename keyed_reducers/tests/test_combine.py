"""
Tests for the combiner.

Critical: the combined reducer must return the prior State object when
nothing changed, and share every untouched slice when something did.
"""

import warnings

import pytest

from keyed_reducers.combine import CombinedReducer, combine
from keyed_reducers.config import CombineConfig
from keyed_reducers.core.actions import Action, ActionTypes, action_type_of
from keyed_reducers.core.errors import (
    InvalidStateError,
    ShapeError,
    ShapeWarning,
    UndefinedStateError,
    UnexpectedKeyWarning,
)
from keyed_reducers.core.reducer import Reducer
from keyed_reducers.core.state import ABSENT, State

INIT = Action(type=ActionTypes.INIT)


def counter(state, action):
    if state is ABSENT:
        state = 0
    if action_type_of(action) == "INC":
        return state + 1
    return state


def identity(initial):
    def reducer(state, action):
        if state is ABSENT:
            return initial
        return state

    return reducer


def test_counter_scenario():
    """INIT -> {counter: 0}, INC -> new state, NOOP -> same object."""
    root = combine({"counter": counter})

    s0 = root(None, INIT)
    assert s0.to_dict() == {"counter": 0}

    s1 = root(s0, Action(type="INC"))
    assert s1.to_dict() == {"counter": 1}
    assert s1 is not s0

    s2 = root(s1, Action(type="NOOP"))
    assert s2 is s1


def test_identity_reducers_keep_reference():
    """When every reducer returns its input, every later dispatch returns s0 itself."""
    a_init = {"a": []}
    b_init = ("b",)
    root = combine({"a": identity(a_init), "b": identity(b_init)})

    s0 = root(None, INIT)
    assert s0.get("a") is a_init
    assert s0.get("b") is b_init

    for action_type in ("ANY", "OTHER", ActionTypes.INIT):
        assert root(s0, Action(type=action_type)) is s0


def test_result_keys_match_reducer_keys():
    root = combine({"x": counter, "y": identity("y"), "z": identity(None)})

    s0 = root(None, INIT)

    assert sorted(s0.keys()) == ["x", "y", "z"]
    # None is a legitimate slice, distinct from ABSENT
    assert s0.get("z") is None


def test_empty_reducer_map():
    """No reducers: INIT yields an empty State, any State passes through as-is."""
    root = combine({})

    s0 = root(None, Action(type="ANY"))
    assert isinstance(s0, State)
    assert len(s0) == 0

    s = State.from_dict({"k": 1})
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UnexpectedKeyWarning)
        assert root(s, Action(type="ANY")) is s


def test_single_change_shares_other_slices():
    """Only the changed slice is rewritten; all others keep their references."""
    todos = ("write tests", "ship")
    settings = {"theme": "dark"}
    root = combine({"counter": counter, "todos": identity(()), "settings": identity({})})

    prior = State.from_dict({"counter": 3, "todos": todos, "settings": settings})
    nxt = root(prior, Action(type="INC"))

    assert nxt is not prior
    assert nxt.get("counter") == 4
    assert nxt.get("todos") is todos
    assert nxt.get("settings") is settings
    # Prior snapshot untouched
    assert prior.get("counter") == 3


def test_missing_key_counts_as_changed():
    """A key absent from prior state is synthesized and forces a new State."""
    root = combine({"counter": counter, "flag": identity(False)})

    prior = State.from_dict({"counter": 0})
    nxt = root(prior, Action(type="NOOP"))

    assert nxt is not prior
    assert nxt.to_dict() == {"counter": 0, "flag": False}
    # Once present and unchanged, the reference holds
    assert root(nxt, Action(type="NOOP")) is nxt


def test_absent_prior_state_is_treated_as_none():
    root = combine({"counter": counter})

    assert root(ABSENT, INIT).to_dict() == {"counter": 0}


def test_undefined_state_error_names_key_and_action():
    """A reducer returning ABSENT for a live action aborts the transition."""
    calls = []

    def breaks_on_boom(state, action):
        if state is ABSENT:
            return 0
        if action_type_of(action) == "BOOM":
            return ABSENT
        return state

    def after(state, action):
        calls.append(action_type_of(action))
        return 0 if state is ABSENT else state

    root = combine({"fragile": breaks_on_boom, "after": after})
    s0 = root(None, INIT)
    calls.clear()

    with pytest.raises(UndefinedStateError) as exc_info:
        root(s0, Action(type="BOOM"))

    assert exc_info.value.key == "fragile"
    assert exc_info.value.action_type == "BOOM"
    assert '"fragile"' in str(exc_info.value)
    assert '"BOOM"' in str(exc_info.value)
    # Remaining keys are not processed
    assert calls == []
    # Prior snapshot still intact
    assert s0.to_dict() == {"fragile": 0, "after": 0}


def test_shape_error_at_composition():
    """A reducer that cannot initialize is rejected before any dispatch."""
    dispatched = []

    def never_initializes(state, action):
        dispatched.append(action)
        return state

    with pytest.raises(ShapeError) as exc_info:
        combine({"counter": counter, "broken": never_initializes})

    assert exc_info.value.key == "broken"
    # Only the INIT probe ran
    assert len(dispatched) == 1


def test_shape_warning_does_not_abort():
    def only_init(state, action):
        if action_type_of(action) == ActionTypes.INIT:
            return 0
        return state

    with pytest.warns(ShapeWarning):
        root = combine({"only_init": only_init}, config=CombineConfig())

    assert root(None, INIT).to_dict() == {"only_init": 0}


def test_shape_warning_escalates_in_strict_mode():
    def only_init(state, action):
        if action_type_of(action) == ActionTypes.INIT:
            return 0
        return state

    with pytest.raises(ShapeError):
        combine({"only_init": only_init}, config=CombineConfig(strict_shapes=True))


def test_unexpected_keys_warn_once_per_instance():
    """The unexpected-key warning fires on the first call only, per composed instance."""
    reducers = {"counter": counter}
    root = combine(reducers)
    stale = State.from_dict({"counter": 0, "legacy": 1, "old": 2})

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        s1 = root(stale, Action(type="NOOP"))
        root(stale, Action(type="NOOP"))
        root(s1, Action(type="INC"))

    unexpected = [w for w in caught if issubclass(w.category, UnexpectedKeyWarning)]
    assert len(unexpected) == 1
    assert unexpected[0].message.keys == ("legacy", "old")
    assert "legacy" in str(unexpected[0].message)

    # Unexpected keys are carried through, and the no-change path keeps the reference
    assert s1 is stale

    # A second composition has its own flag
    other = combine(reducers)
    with pytest.warns(UnexpectedKeyWarning):
        other(stale, Action(type="NOOP"))


def test_unexpected_key_check_only_on_first_call():
    """Stale keys appearing after the first call are not reported."""
    root = combine({"counter": counter})
    s0 = root(None, INIT)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        root(s0.set("legacy", 1), Action(type="NOOP"))

    assert not [w for w in caught if issubclass(w.category, UnexpectedKeyWarning)]


def test_unexpected_key_warning_disabled_by_config():
    root = combine({"counter": counter}, config=CombineConfig(warn_unexpected_keys=False))

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        root(State.from_dict({"counter": 0, "legacy": 1}), Action(type="NOOP"))


def test_invalid_prior_state_type():
    root = combine({"counter": counter})

    with pytest.raises(InvalidStateError):
        root({"counter": 0}, Action(type="NOOP"))

    # Also a TypeError for callers that catch broadly
    with pytest.raises(TypeError):
        root([("counter", 0)], Action(type="NOOP"))


def test_reducer_map_frozen_at_composition():
    """Mutating the caller's mapping after combine() has no effect."""
    reducers = {"counter": counter}
    root = combine(reducers)
    reducers["extra"] = identity("x")

    assert root.keys == ("counter",)
    assert root(None, INIT).to_dict() == {"counter": 0}
    with pytest.raises(TypeError):
        root.reducers["more"] = counter


def test_reducer_order_preserved():
    order = []

    def tracking(name):
        def reducer(state, action):
            order.append(name)
            return name if state is ABSENT else state

        return reducer

    root = combine({"b": tracking("b"), "a": tracking("a"), "c": tracking("c")})
    order.clear()
    root(None, INIT)

    assert order == ["b", "a", "c"]
    assert root.keys == ("b", "a", "c")


def test_default_state_factory():
    root = combine({"counter": counter}, default_state=lambda: State.from_dict({"counter": 41}))

    assert root(None, Action(type="INC")).to_dict() == {"counter": 42}


def test_works_with_reducer_registry_and_dict_actions():
    todos = Reducer(initial=())
    todos.register("todos/added", lambda items, action: items + (action["payload"]["text"],))
    root = combine({"todos": todos, "counter": counter})

    s0 = root(None, {"type": ActionTypes.INIT})
    s1 = root(s0, {"type": "todos/added", "payload": {"text": "ship"}})

    assert s1.get("todos") == ("ship",)
    assert s1.get("counter") is s0.get("counter")
    assert root(s1, {"type": "NOOP"}) is s1


def test_instances_are_independent():
    a = combine({"counter": counter})
    b = combine({"counter": counter})

    assert isinstance(a, CombinedReducer)
    assert a.instance_id != b.instance_id
    assert "counter" in repr(a)


def test_many_transitions_deterministic():
    """Same action sequence must produce equal states across runs."""
    root = combine({"counter": counter, "static": identity("s")})
    actions = [Action(type=t) for t in ("INC", "NOOP", "INC", "INC", "NOOP")]

    results = []
    for _ in range(10):
        s = root(None, INIT)
        for a in actions:
            s = root(s, a)
        results.append(s.to_dict())

    assert all(r == {"counter": 3, "static": "s"} for r in results)
