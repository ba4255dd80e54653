from __future__ import annotations

import ast
import sys
import tokenize
from io import StringIO
from pathlib import Path

from tools.guards import iter_python_files, parse, report

FORBIDDEN_IMPORTS = {"Any", "cast"}


def _typing_errors(path: Path, node: ast.AST) -> list[str]:
    if isinstance(node, ast.ImportFrom) and node.module == "typing":
        return [
            f"{path}:{node.lineno} forbidden typing import '{alias.name}'"
            for alias in node.names
            if alias.name in FORBIDDEN_IMPORTS
        ]
    if (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == "typing"
        and node.attr in FORBIDDEN_IMPORTS
    ):
        return [f"{path}:{node.lineno} forbidden use of typing.{node.attr}"]
    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == "cast"
    ):
        return [f"{path}:{node.lineno} forbidden use of cast()"]
    if isinstance(node, ast.Name) and node.id == "Any":
        return [f"{path}:{node.lineno} forbidden type 'Any'"]
    return []


def check_path(path: Path) -> list[str]:
    text, tree = parse(path)
    errors: list[str] = []
    for node in ast.walk(tree):
        errors.extend(_typing_errors(path, node))

    # Comments only, so string literals mentioning the marker are allowed
    reader = StringIO(text).readline
    errors.extend(
        f"{path}:{tok.start[0]} forbidden 'type: ignore'"
        for tok in tokenize.generate_tokens(reader)
        if tok.type == tokenize.COMMENT and "type: ignore" in tok.string
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
