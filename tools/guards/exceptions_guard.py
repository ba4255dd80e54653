from __future__ import annotations

import ast
import sys
from pathlib import Path

from tools.guards import iter_python_files, parse, report

# Logger methods that count as handling a caught exception.
LOG_METHODS = frozenset({"debug", "info", "warning", "error", "exception", "log"})

# Functions allowed to catch BaseException without re-raising, keyed by
# "<package>/<module>.py". They must still log what they catch.
DISCARD_BOUNDARIES = frozenset(
    {
        ("fate/guard.py", "_invoke"),
        ("fate/guard.py", "_report_discard"),
    }
)


def handler_has_raise(handler: ast.ExceptHandler) -> bool:
    return any(isinstance(node, ast.Raise) for node in ast.walk(handler))


def handler_logs(handler: ast.ExceptHandler) -> bool:
    return any(
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Attribute)
        and node.func.attr in LOG_METHODS
        for node in ast.walk(handler)
    )


def catches_base_exception(handler: ast.ExceptHandler) -> bool:
    caught = handler.type
    names: list[ast.expr] = []
    if isinstance(caught, ast.Tuple):
        names.extend(caught.elts)
    elif caught is not None:
        names.append(caught)
    return any(isinstance(n, ast.Name) and n.id == "BaseException" for n in names)


def boundary_handlers(path: Path, tree: ast.Module) -> set[int]:
    """Line numbers of handlers that sit inside an allowed discard boundary."""
    key = f"{path.parent.name}/{path.name}"
    lines: set[int] = set()
    for fn in ast.walk(tree):
        if not isinstance(fn, (ast.FunctionDef, ast.AsyncFunctionDef)):
            continue
        if (key, fn.name) not in DISCARD_BOUNDARIES:
            continue
        lines.update(
            node.lineno for node in ast.walk(fn) if isinstance(node, ast.ExceptHandler)
        )
    return lines


def check_path(path: Path) -> list[str]:
    _, tree = parse(path)
    allowed = boundary_handlers(path, tree)
    errors: list[str] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.ExceptHandler):
            continue
        if node.type is None:
            errors.append(f"{path}:{node.lineno} bare 'except' is forbidden")
            continue
        raises = handler_has_raise(node)
        if catches_base_exception(node) and not raises and node.lineno not in allowed:
            errors.append(
                f"{path}:{node.lineno} catching BaseException "
                "without re-raise is forbidden"
            )
        if not raises and not handler_logs(node):
            errors.append(
                f"{path}:{node.lineno} except without re-raise or logging is forbidden"
            )
    return errors


def run(roots: list[str]) -> int:
    errors: list[str] = []
    for path in iter_python_files(roots):
        errors.extend(check_path(path))
    return report(errors)


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
