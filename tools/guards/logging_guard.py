from __future__ import annotations

import ast
import sys
from pathlib import Path

from tools.guards import iter_python_files, parse, report

# Only the application entry point may configure logging; library modules
# obtain loggers and leave handlers alone.
CONFIG_CALLS = frozenset({"basicConfig", "setup_logging"})
CONFIG_OWNER = "logging.py"


def _call_name(node: ast.Call) -> str | None:
    if isinstance(node.func, ast.Name):
        return node.func.id
    if isinstance(node.func, ast.Attribute):
        return node.func.attr
    return None


def check_path(path: Path, *, library: bool) -> list[str]:
    _, tree = parse(path)
    errors: list[str] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        name = _call_name(node)
        if isinstance(node.func, ast.Name) and name == "print":
            errors.append(f"{path}:{node.lineno} use logger; 'print' is forbidden")
        elif library and name in CONFIG_CALLS and path.name != CONFIG_OWNER:
            errors.append(
                f"{path}:{node.lineno} library code must not "
                f"configure logging ('{name}')"
            )
    return errors


def run(roots: list[str], library_roots: tuple[str, ...] = ("fate",)) -> int:
    errors: list[str] = []
    for root in roots:
        library = Path(root).name in library_roots
        for path in iter_python_files([root]):
            errors.extend(check_path(path, library=library))
    return report(errors)


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
