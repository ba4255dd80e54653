"""Deferred-invocation guard.

A guard is either empty or armed with one zero-argument callable. The callable
runs at most once: when the guard is triggered, when the ``with`` block that
manages it exits, or when the guard is finalized. ``release()`` disarms it
without running anything.
"""

from __future__ import annotations

import types
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Generic, Self, TypeVar, overload

from fate.config import get_settings
from fate.errors import GuardCopyError, NotCallableError
from fate.logging import get_logger, resolve_level
from fate.models import DiscardedFailure, Phase
from fate.transfer import transfer, transfer_tier
from fate.types import Deferred

T = TypeVar("T", bound=Deferred)
V = TypeVar("V")

DiscardHook = Callable[[DiscardedFailure], object]

_logger = get_logger(__name__)


def describe(func: object) -> str:
    """Short, non-raising label for a bound callable."""
    if isinstance(
        func, (types.FunctionType, types.BuiltinFunctionType, types.MethodType)
    ):
        return func.__qualname__
    return type(func).__qualname__


class BaseFate(ABC, Generic[T]):
    """State machine shared by every guard kind.

    Subclasses decide how a callable is stored and how it moves between two
    guards of the same kind.
    """

    __slots__ = ("_func",)

    _func: Deferred | None

    # -- lifecycle -- #

    def __call__(self) -> None:
        self._invoke("invoke")

    def trigger(self) -> None:
        """Run the bound callable now, if any; failures are discarded."""
        self._invoke("invoke")

    def release(self) -> None:
        """Disarm without running the bound callable."""
        self._func = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        self._invoke("exit")

    def __del__(self) -> None:
        # __init__ may have failed before the slot was assigned
        if getattr(self, "_func", None) is not None:
            self._invoke("finalize")

    # -- queries -- #

    @property
    def armed(self) -> bool:
        return self._func is not None

    @property
    def empty(self) -> bool:
        return self._func is None

    def __bool__(self) -> bool:
        return self._func is not None

    def __repr__(self) -> str:
        func = self._func
        label = "<empty>" if func is None else describe(func)
        return f"{type(self).__name__}({label})"

    # -- transfer -- #

    def move(self) -> Self:
        """Return a new guard owning this guard's callable; this guard is emptied."""
        dst = self._empty_like()
        dst._adopt(self)
        return dst

    @classmethod
    def take(cls, source: Self) -> Self:
        """Move-construct a guard of this kind from ``source``."""
        if type(source) is not cls:
            raise TypeError(
                f"cannot transfer {type(source).__name__} into {cls.__name__}"
            )
        return source.move()

    def assign(self, source: Self) -> None:
        """Run this guard's callable, then take over ``source``'s callable.

        Assigning a guard to itself does nothing.
        """
        if source is self:
            return
        if type(source) is not type(self):
            raise TypeError(
                f"cannot transfer {type(source).__name__} into {type(self).__name__}"
            )
        self._invoke("assign")
        self._adopt(source)

    def __copy__(self) -> Self:
        raise GuardCopyError(type(self))

    def __deepcopy__(self, memo: dict[int, object]) -> Self:
        raise GuardCopyError(type(self))

    def __reduce_ex__(self, protocol: object) -> str:
        raise GuardCopyError(type(self))

    # -- hooks for subclasses -- #

    @abstractmethod
    def _empty_like(self) -> Self: ...

    @abstractmethod
    def _adopt(self, source: Self) -> None: ...

    def _discard_hook(self) -> DiscardHook | None:
        return None

    # -- invocation -- #

    def _invoke(self, phase: Phase) -> None:
        func = self._func
        if func is None:
            return
        # Empty before calling so a reentrant trigger is a no-op.
        self._func = None
        try:
            func()
        except BaseException as exc:
            # Everything the callable raises stops here, SystemExit and
            # KeyboardInterrupt included.
            settings = get_settings()
            if settings.log_discarded:
                _logger.log(
                    resolve_level(settings.discard_level),
                    "Discarded failure from deferred callable",
                    exc_info=exc,
                    extra={"target": describe(func), "phase": phase},
                )
            self._report_discard(exc, func, phase)

    def _report_discard(
        self, exc: BaseException, func: Deferred, phase: Phase
    ) -> None:
        hook = self._discard_hook()
        if hook is None:
            return
        try:
            hook(
                DiscardedFailure(
                    error_type=type(exc).__name__,
                    message=str(exc),
                    target=describe(func),
                    phase=phase,
                    timestamp=datetime.now(UTC),
                )
            )
        except BaseException:
            _logger.exception(
                "Discard hook failed",
                extra={"target": describe(func), "phase": phase},
            )


class Fate(BaseFate[T]):
    """Guard for any zero-argument callable.

    ``Fate(value)`` binds ``value`` itself; ``Fate(value, kind=K)`` binds
    ``K(value)``. If binding fails the error propagates and nothing is armed.
    ``on_discard`` receives a ``DiscardedFailure`` for every failure the
    bound callable raises when run.

    Moving between guards follows ``fate.transfer``: the tier depends on what
    the callable's type declares, and only the ``basic`` tier can break the
    run-exactly-once contract.
    """

    __slots__ = ("_on_discard",)

    @overload
    def __init__(
        self,
        value: T | None = None,
        *,
        on_discard: DiscardHook | None = None,
    ) -> None: ...

    @overload
    def __init__(
        self,
        value: V,
        *,
        kind: Callable[[V], T],
        on_discard: DiscardHook | None = None,
    ) -> None: ...

    def __init__(
        self,
        value: object = None,
        *,
        kind: Callable[..., T] | None = None,
        on_discard: DiscardHook | None = None,
    ) -> None:
        self._func = None
        self._on_discard = on_discard
        func: object
        if kind is not None:
            func = kind(value)
        elif value is None:
            return
        else:
            func = value
        if not callable(func):
            raise NotCallableError(func)
        self._func = func

    def _empty_like(self) -> Self:
        return type(self)(on_discard=self._on_discard)

    def _adopt(self, source: Self) -> None:
        func = source._func
        if func is None:
            return
        tier = transfer_tier(func)
        moved = transfer(func, tier)
        self._func = moved
        source._func = None
        _logger.debug(
            "Transferred deferred callable",
            extra={"target": describe(moved), "tier": tier.value},
        )

    def _discard_hook(self) -> DiscardHook | None:
        return self._on_discard
