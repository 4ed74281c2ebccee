"""Endpoints for today's nap log."""

from fastapi import APIRouter, HTTPException, status

from sleepsync.api.dependencies import NapLogDep
from sleepsync.models.nap import NapCreate, ObservedNap

router = APIRouter(prefix="/naps", tags=["naps"])


@router.get("", response_model=list[ObservedNap])
async def list_naps(nap_log: NapLogDep) -> list[ObservedNap]:
    """Return logged naps, earliest first."""
    return nap_log.naps


@router.post("", response_model=list[ObservedNap])
async def add_nap(payload: NapCreate, nap_log: NapLogDep) -> list[ObservedNap]:
    """Log a nap and return the updated list. A blank field changes nothing."""
    return nap_log.add(payload.start, payload.end)


@router.delete("/{nap_id}", response_model=list[ObservedNap])
async def remove_nap(nap_id: str, nap_log: NapLogDep) -> list[ObservedNap]:
    """Remove a logged nap and return the remaining ones."""
    if not nap_log.remove(nap_id):
        raise HTTPException(status_code=404, detail=f"Nap {nap_id} not found")
    return nap_log.naps


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_naps(nap_log: NapLogDep) -> None:
    """Start a new day (or a new age) with an empty log."""
    nap_log.clear()
