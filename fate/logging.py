from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

from fate.config import get_settings

_CONTEXT_KEYS = ("target", "phase", "tier")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logs with stable keys."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Optional contextual fields
        for key in _CONTEXT_KEYS:
            if key in record.__dict__:
                data[key] = record.__dict__[key]
        if record.exc_info and record.exc_info[0] is not None:
            data["error_type"] = record.exc_info[0].__name__

        return json.dumps(data, ensure_ascii=False)


def setup_logging(level: str | None = None) -> None:
    """Configure global structured logging; idempotent-ish."""
    name = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    root.setLevel(resolve_level(name))
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    # Avoid duplicate handlers if setup is called multiple times
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return module logger."""
    return logging.getLogger(name)


def resolve_level(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as ``"WARNING"`` to its number."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default
