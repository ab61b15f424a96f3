from dataclasses import dataclass, field

from shrs.state import State


@dataclass
class Counter:
    count: int = 0


@dataclass
class Names:
    names: list = field(default_factory=list)


def test_insert_and_get():
    state = State()
    state.insert(Counter(3))
    assert state.get(Counter) == Counter(3)
    assert state.get(Names) is None


def test_insert_replaces_by_type():
    state = State()
    state.insert(Counter(1))
    state.insert(Counter(2))
    assert state.get(Counter) == Counter(2)


def test_get_or_default_inserts():
    state = State()
    assert Counter not in state
    value = state.get_or_default(Counter)
    assert value == Counter()
    assert Counter in state
    value.count += 5
    assert state.get(Counter).count == 5


def test_get_or_default_keeps_existing():
    state = State()
    state.insert(Names(["a"]))
    assert state.get_or_default(Names).names == ["a"]


def test_types_are_separate():
    state = State()
    state.insert(Counter(1))
    state.insert(Names(["x"]))
    assert state.get(Counter) == Counter(1)
    assert state.get(Names) == Names(["x"])