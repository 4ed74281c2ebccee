"""Age-band knowledge table models."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .nap import TimeOfDay


class BandBase(BaseModel):
    key: str
    label: str
    range_start: int = Field(..., ge=0, description="Lower age bound in months (inclusive)")
    range_end: int = Field(..., ge=0, description="Upper age bound in months (inclusive)")
    min_wake: int = Field(..., ge=0, description="Shortest wake window in minutes")
    max_wake: int = Field(..., ge=0, description="Longest wake window in minutes")
    naps: int = Field(..., ge=0, description="Target number of naps per day")
    bedtime_window: int = Field(..., gt=0, description="Wake time before bed in minutes")
    too_long_nap_minutes: int = Field(..., gt=0)
    latest_nap_end_time: TimeOfDay
    ideal_bedtime: TimeOfDay
    description: str

    model_config = {"frozen": True}


class WindowBand(BandBase):
    """Naps placed purely by elapsed wake time."""
    mode: Literal["window"] = "window"


class HybridBand(BandBase):
    """Wake windows still lead, the day rhythm starts to settle."""
    mode: Literal["hybrid"] = "hybrid"


class ClockBand(BandBase):
    """Naps anchored to the clock, with nap capping for early starts."""
    mode: Literal["clock"] = "clock"
    nap_anchor: TimeOfDay = "12:30"
    capped_nap_minutes: int = Field(75, gt=0)


AgeBand = Annotated[Union[WindowBand, HybridBand, ClockBand], Field(discriminator="mode")]
