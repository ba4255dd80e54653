from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from fate.logging import StructuredFormatter, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


def test_setup_logging_adds_handler_and_is_idempotent() -> None:
    root = logging.getLogger()
    # Clear any existing handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    setup_logging("DEBUG")
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)
    assert root.level == logging.DEBUG
    count = len(root.handlers)

    # Calling again should not add duplicate handlers
    setup_logging("DEBUG")
    assert len(root.handlers) == count


def test_setup_logging_uses_configured_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FATE_LOG_LEVEL", "ERROR")
    setup_logging()
    assert logging.getLogger().level == logging.ERROR


def test_structured_formatter_includes_guard_context() -> None:
    record = logging.makeLogRecord(
        {
            "name": "fate.guard",
            "levelno": logging.WARNING,
            "levelname": "WARNING",
            "pathname": __file__,
            "lineno": 10,
            "msg": "Discarded failure from deferred callable",
            "target": "_foo",
            "phase": "exit",
        }
    )
    data = json.loads(StructuredFormatter().format(record))
    assert data["level"] == "WARNING"
    assert data["logger"] == "fate.guard"
    assert data["target"] == "_foo"
    assert data["phase"] == "exit"
    assert "tier" not in data


def test_resolve_level() -> None:
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level("nonsense", logging.ERROR) == logging.ERROR
