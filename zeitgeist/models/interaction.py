"""Interaction State: the comfort/agitate tally driven by users."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class InteractionKind(str, Enum):
    COMFORT = "comfort"
    AGITATE = "agitate"


class InteractionState(BaseModel):
    """Snapshot of the process-wide interaction counters."""

    comfort: int = Field(ge=0, default=0)
    agitate: int = Field(ge=0, default=0)
    last_reset: datetime
