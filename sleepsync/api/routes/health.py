"""Healthcheck endpoint."""

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    knowledge_base_url: Optional[str] = None


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Return the service status and the knowledge-base link, if configured."""
    url = getattr(request.app.state, "knowledge_base_url", None)
    return HealthResponse(status="ok", knowledge_base_url=url or None)
