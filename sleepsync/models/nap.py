from typing import Annotated

from pydantic import BaseModel, Field

# "7:05" and "07:05" are both accepted, output is always zero-padded
TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"

TimeOfDay = Annotated[str, Field(pattern=TIME_PATTERN, examples=["07:00"])]
# Same as TimeOfDay but an empty string is allowed (unfilled input field)
OptionalTimeOfDay = Annotated[str, Field(pattern=r"^(([01]?\d|2[0-3]):[0-5]\d)?$")]


class NapWindow(BaseModel):
    start: TimeOfDay
    end: TimeOfDay


class NapCreate(BaseModel):
    """Payload to log a nap. A blank field makes the request a no-op."""
    start: OptionalTimeOfDay = ""
    end: OptionalTimeOfDay = ""

    model_config = {"str_strip_whitespace": True}


class ObservedNap(NapWindow):
    """A nap that already happened today."""
    id: str
    duration: int = Field(..., ge=0, lt=1440, description="Length in minutes")

    model_config = {"frozen": True}
