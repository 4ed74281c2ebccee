"""Derivation request and result models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from .band import AgeBand
from .nap import NapWindow, TimeOfDay


EventKind = Literal["wake", "nap", "bedtime"]
Severity = Literal["normal", "warning", "critical"]


class PlannedEvent(BaseModel):
    kind: EventKind
    start: str
    end: Optional[str] = None
    title: str
    description: str
    reasoning: str
    is_prediction: bool
    severity: Optional[Severity] = None

    model_config = {"frozen": True}


class ScheduleRequest(BaseModel):
    """Payload for a one-shot derivation with an explicit nap list."""
    age_months: int = Field(..., ge=0, description="Age in completed months")
    wake_time: TimeOfDay
    naps: list[NapWindow] = []


class DerivationResult(BaseModel):
    """Full rest-of-day plan."""
    events: list[PlannedEvent]
    warnings: list[str] = []
    band: AgeBand
    wake_window_minutes: int


class BandLookup(BaseModel):
    age_months: int
    band: AgeBand
    wake_window_minutes: int
