from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Phase = Literal["invoke", "exit", "finalize", "assign"]


class DiscardedFailure(BaseModel):
    """Structured record of a failure raised by a bound callable and discarded."""

    error_type: str
    message: str
    target: str
    phase: Phase
    timestamp: datetime
