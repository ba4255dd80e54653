from __future__ import annotations

import functools
import gc
import sys
from collections.abc import Callable, Iterator

import pytest

from fate import Fate, FunctionFate, NotAFunctionError
from fate.funcref import is_function_reference

# Function references carry no state, so the module keeps it for them.
_CALLS: list[str] = []
_SELF_GUARD: list[FunctionFate] = []

GuardFactory = Callable[
    [Callable[[], None]], "Fate[Callable[[], None]] | FunctionFate"
]


@pytest.fixture(autouse=True)
def _reset_calls() -> Iterator[None]:
    _CALLS.clear()
    _SELF_GUARD.clear()
    yield
    _CALLS.clear()
    _SELF_GUARD.clear()


def _foo() -> None:
    _CALLS.append("foo")


def _explode() -> None:
    _CALLS.append("explode")
    raise RuntimeError("bad foo")


def _breaker() -> None:
    _CALLS.append("breaker")
    _SELF_GUARD[0]()


class _Callable:
    def __call__(self) -> None:
        _CALLS.append("instance")

    def method(self) -> None:
        _CALLS.append("method")


def test_is_function_reference() -> None:
    captured = "x"

    def closure() -> None:
        _CALLS.append(captured)

    assert is_function_reference(_foo)
    assert is_function_reference(len)
    assert is_function_reference(lambda: None)
    assert not is_function_reference(closure)
    assert not is_function_reference(_Callable())
    assert not is_function_reference(_Callable().method)
    assert not is_function_reference([].clear)
    assert not is_function_reference(functools.partial(_foo))
    assert not is_function_reference("text")


def test_stateful_callables_are_rejected() -> None:
    with pytest.raises(NotAFunctionError) as info:
        FunctionFate(_Callable())
    assert isinstance(info.value, TypeError)
    with pytest.raises(NotAFunctionError):
        FunctionFate(_Callable().method)
    gc.collect()
    assert _CALLS == []


def test_default_function_guard_is_empty() -> None:
    g = FunctionFate()
    assert not g
    assert g.empty
    assert repr(g) == "FunctionFate(<empty>)"
    g()
    assert g.empty


@pytest.mark.parametrize("factory", [Fate, FunctionFate])
def test_both_guard_kinds_run_once(factory: GuardFactory) -> None:
    g = factory(_foo)
    assert g.armed
    g()
    g()
    assert g.empty
    del g
    assert _CALLS == ["foo"]


@pytest.mark.parametrize("factory", [Fate, FunctionFate])
def test_both_guard_kinds_run_on_finalization(factory: GuardFactory) -> None:
    g = factory(_foo)
    del g
    assert _CALLS == ["foo"]


@pytest.mark.parametrize("factory", [Fate, FunctionFate])
def test_both_guard_kinds_discard_failures(factory: GuardFactory) -> None:
    g = factory(_explode)
    g()
    assert g.empty
    assert _CALLS == ["explode"]


@pytest.mark.parametrize("factory", [Fate, FunctionFate])
def test_both_guard_kinds_release(factory: GuardFactory) -> None:
    g = factory(_foo)
    g.release()
    del g
    assert _CALLS == []


def test_self_referential_function_runs_once() -> None:
    g = FunctionFate(_breaker)
    _SELF_GUARD.append(g)
    del g
    _SELF_GUARD[0].trigger()
    assert _CALLS == ["breaker"]
    assert _SELF_GUARD[0].empty


def test_function_guard_move_and_assign() -> None:
    src = FunctionFate(_foo)
    dst = src.move()
    assert src.empty
    assert dst.armed

    other = FunctionFate(_breaker)
    _SELF_GUARD.append(other)
    other.assign(dst)
    assert _CALLS == ["breaker"]
    assert dst.empty

    other.assign(other)
    assert other.armed
    other()
    assert _CALLS == ["breaker", "foo"]


def test_function_guard_take() -> None:
    src = FunctionFate(_foo)
    dst = FunctionFate.take(src)
    assert src.empty
    dst()
    assert _CALLS == ["foo"]


def test_function_guard_with_block() -> None:
    with FunctionFate(_foo):
        assert _CALLS == []
    assert _CALLS == ["foo"]


def test_function_guard_stores_only_the_reference() -> None:
    small = FunctionFate(_foo)
    general = Fate(_foo)
    assert not hasattr(small, "__dict__")
    assert FunctionFate.__slots__ == ()
    assert sys.getsizeof(small) < sys.getsizeof(general)
    small.release()
    general.release()
