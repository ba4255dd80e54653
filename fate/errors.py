from __future__ import annotations


class FateError(Exception):
    """Base class for errors raised by guard operations."""


class NotCallableError(FateError, TypeError):
    """Raised when a guard is armed with a value that cannot be called."""

    def __init__(self, value: object) -> None:
        super().__init__(f"cannot bind non-callable {type(value).__name__!r}")
        self.value = value


class NotAFunctionError(FateError, TypeError):
    """Raised when a function-reference guard receives something with state.

    Closures, bound methods and callable instances carry captured state and
    belong in the generic guard.
    """

    def __init__(self, value: object) -> None:
        super().__init__(
            f"expected a plain function reference, got {type(value).__name__!r}"
        )
        self.value = value


class GuardCopyError(FateError, TypeError):
    """Raised on any attempt to duplicate a guard."""

    def __init__(self, guard_type: type) -> None:
        super().__init__(
            f"{guard_type.__name__} cannot be copied; use move() to transfer it"
        )
        self.guard_type = guard_type
