"""Schedule derivation endpoints."""

from fastapi import APIRouter, Query

from sleepsync.api.dependencies import NapLogDep
from sleepsync.models.nap import TIME_PATTERN
from sleepsync.models.schedule import DerivationResult, ScheduleRequest
from sleepsync.services import schedule_service

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("", response_model=DerivationResult)
async def derive_schedule(payload: ScheduleRequest) -> DerivationResult:
    """Derive the rest of the day from an explicit list of naps."""
    return schedule_service.derive_schedule(payload.age_months, payload.wake_time, payload.naps)


@router.get("", response_model=DerivationResult)
async def derive_schedule_from_log(
    nap_log: NapLogDep,
    age_months: int = Query(..., ge=0, description="Age in completed months"),
    wake_time: str = Query(..., pattern=TIME_PATTERN, description="Wake-up time (HH:MM)"),
) -> DerivationResult:
    """
    Derive the rest of the day against the naps logged so far.

    Recomputed on every call; nothing is cached.
    """
    return schedule_service.derive_schedule(age_months, wake_time, nap_log.naps)
