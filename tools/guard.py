from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from tools.guards import exceptions_guard, logging_guard, silencing_guard, typing_guard

Runner = Callable[[list[str]], int]

ROOT = Path(__file__).resolve().parent.parent
DEFAULT_ROOTS = ("fate", "tests", "tools")


def run_guards(roots: list[str]) -> int:
    runners: list[Runner] = [
        typing_guard.run,
        exceptions_guard.run,
        silencing_guard.run,
        logging_guard.run,
    ]
    for runner in runners:
        rc = runner(roots)
        if rc != 0:
            return rc
    return 0


def main() -> int:
    return run_guards([str(ROOT / name) for name in DEFAULT_ROOTS])


if __name__ == "__main__":
    raise SystemExit(main())
