from __future__ import annotations

from typing import TypeVar

from fate.funcref import FunctionFate, is_function_reference
from fate.guard import Fate
from fate.types import Deferred

T = TypeVar("T", bound=Deferred)


def make_fate(value: T) -> FunctionFate | Fate[T]:
    """Bind ``value`` in the smallest guard able to hold it.

    Plain function references get a ``FunctionFate``; closures, bound methods
    and callable objects get a ``Fate``.
    """
    if is_function_reference(value):
        return FunctionFate(value)
    return Fate(value)
