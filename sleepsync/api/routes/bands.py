"""Read-only access to the age-band table."""

from fastapi import APIRouter, Path

from sleepsync.models.band import AgeBand
from sleepsync.models.schedule import BandLookup
from sleepsync.services import bands

router = APIRouter(prefix="/bands", tags=["bands"])


@router.get("", response_model=list[AgeBand])
async def list_bands() -> list[AgeBand]:
    """Return all age bands, youngest first."""
    return bands.all_bands()


@router.get("/{age_months}", response_model=BandLookup)
async def get_band(age_months: int = Path(..., ge=0)) -> BandLookup:
    """Return the band for an age and its interpolated wake window."""
    band = bands.resolve_band(age_months)
    return BandLookup(
        age_months=age_months,
        band=band,
        wake_window_minutes=bands.interpolated_wake_window(age_months, band),
    )
