from __future__ import annotations

import sys
from pathlib import Path

from tools.guards import iter_python_files, parse, report

# Marker is built dynamically so the literal never appears in source,
# while still detecting the exact sequence in repository files.
# Discarding failures is the job of the guard's invocation boundary alone.
MARKER: str = "su" + "press"


def check_path(path: Path) -> list[str]:
    text, _ = parse(path)
    return [
        f"{path}:{line_number} forbidden marker '{MARKER}'"
        for line_number, line in enumerate(text.splitlines(), start=1)
        if MARKER in line.lower()
    ]


def run(roots: list[str]) -> int:
    errors: list[str] = []
    for path in iter_python_files(roots):
        errors.extend(check_path(path))
    return report(errors)


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
