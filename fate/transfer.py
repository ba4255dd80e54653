"""Ownership transfer of a bound callable between guards.

Which mechanism is used depends on what the callable's type declares:

``nofail``
    The type has no ``__fate_move__`` hook (the reference itself is handed
    over) or sets ``__fate_nothrow_move__ = True``. The transfer cannot fail.

``strong``
    The type has a fallible ``__fate_move__`` but defines ``__copy__``. The
    destination receives a duplicate and the source is only emptied once the
    duplicate exists, so a failure leaves both guards as they were.

``basic``
    Neither of the above. ``__fate_move__`` runs and may consume the source
    before failing. The destination stays empty but the source can be left
    holding a spent callable, so the run-exactly-once contract is not
    guaranteed on this path.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from enum import Enum
from typing import TypeVar

from fate.logging import get_logger
from fate.types import Deferred

T = TypeVar("T", bound=Deferred)

_logger = get_logger(__name__)


class TransferTier(str, Enum):
    NOFAIL = "nofail"
    STRONG = "strong"
    BASIC = "basic"


def _move_hook(cls: type) -> Callable[..., object] | None:
    hook = getattr(cls, "__fate_move__", None)
    return hook if callable(hook) else None


def transfer_tier(func: object) -> TransferTier:
    """Return the exception-safety tier a transfer of ``func`` will get."""
    cls = type(func)
    if _move_hook(cls) is None or getattr(cls, "__fate_nothrow_move__", False) is True:
        return TransferTier.NOFAIL
    if callable(getattr(cls, "__copy__", None)):
        return TransferTier.STRONG
    return TransferTier.BASIC


def transfer(func: T, tier: TransferTier) -> T:
    """Produce the object the destination guard owns after moving ``func``.

    Failures propagate unchanged; the caller must not touch either guard's
    state until this returns.
    """
    if tier is TransferTier.STRONG:
        duplicate: T = copy.copy(func)
        return duplicate
    # Same lookup as transfer_tier: instance attributes are ignored.
    hook: Callable[[T], T] | None = getattr(type(func), "__fate_move__", None)
    if not callable(hook):
        return func
    if tier is TransferTier.NOFAIL:
        return hook(func)
    try:
        return hook(func)
    except Exception:
        _logger.warning(
            "Transfer failed without rollback; source may hold a consumed callable",
            extra={"target": type(func).__qualname__, "tier": tier.value},
        )
        raise
