from __future__ import annotations

from typing import Protocol


class Deferred(Protocol):
    """Zero-argument callable bound by a guard; the return value is ignored."""

    def __call__(self) -> object: ...
