from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Package settings loaded from environment in a type-safe, framework-free way."""

    log_level: str
    log_discarded: bool
    discard_level: str

    @staticmethod
    def from_env() -> Settings:
        prefix = "FATE_"
        log_level = os.getenv(f"{prefix}LOG_LEVEL", "INFO").strip().upper() or "INFO"
        discarded_raw = os.getenv(f"{prefix}LOG_DISCARDED", "true").strip().lower()
        discard_level = (
            os.getenv(f"{prefix}DISCARD_LEVEL", "WARNING").strip().upper() or "WARNING"
        )
        return Settings(
            log_level=log_level,
            log_discarded=discarded_raw in _TRUTHY,
            discard_level=discard_level,
        )


@lru_cache
def get_settings() -> Settings:
    """Settings for the current process.

    Call ``get_settings.cache_clear()`` to reload.
    """
    return Settings.from_env()
