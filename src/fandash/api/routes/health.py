"""Process health endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from fandash import __version__

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    manager_url: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report liveness and which management endpoint is configured."""
    from fandash.api.app import get_config

    return HealthResponse(manager_url=get_config().manager_url)
