"""Routes package: exports all FastAPI routers."""

from .bands import router as bands_router
from .health import router as health_router
from .naps import router as naps_router
from .schedule import router as schedule_router

__all__ = ["health_router", "bands_router", "schedule_router", "naps_router"]
