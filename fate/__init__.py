"""Deferred-invocation guards.

A guard binds a zero-argument callable and runs it exactly once: when the
holder triggers it, or when the guard's lifetime ends, unless it was released.
"""

from __future__ import annotations

from fate.config import Settings, get_settings
from fate.errors import FateError, GuardCopyError, NotAFunctionError, NotCallableError
from fate.factory import make_fate
from fate.funcref import FunctionFate
from fate.guard import Fate
from fate.logging import get_logger, setup_logging
from fate.models import DiscardedFailure
from fate.transfer import TransferTier, transfer_tier

__all__ = [
    "DiscardedFailure",
    "Fate",
    "FateError",
    "FunctionFate",
    "GuardCopyError",
    "NotAFunctionError",
    "NotCallableError",
    "Settings",
    "TransferTier",
    "get_logger",
    "get_settings",
    "make_fate",
    "setup_logging",
    "transfer_tier",
]
