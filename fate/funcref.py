from __future__ import annotations

import types
from collections.abc import Callable
from typing import Self, TypeGuard

from fate.errors import NotAFunctionError
from fate.guard import BaseFate

FunctionRef = Callable[[], object]


def is_function_reference(value: object) -> TypeGuard[FunctionRef]:
    """True for functions that carry no captured state.

    Accepts Python functions without closure cells and builtins that are not
    bound to an instance. Bound methods, closures, partials and callable
    instances are rejected.
    """
    if isinstance(value, types.FunctionType):
        return value.__closure__ is None
    if isinstance(value, types.BuiltinFunctionType):
        owner = value.__self__
        return owner is None or isinstance(owner, types.ModuleType)
    return False


class FunctionFate(BaseFate[FunctionRef]):
    """Guard specialized for plain function references.

    Stores nothing but the function itself; transfers never fail.
    """

    __slots__ = ()

    def __init__(self, func: FunctionRef | None = None) -> None:
        self._func = None
        if func is None:
            return
        if not is_function_reference(func):
            raise NotAFunctionError(func)
        self._func = func

    def _empty_like(self) -> Self:
        return type(self)()

    def _adopt(self, source: Self) -> None:
        self._func = source._func
        source._func = None
