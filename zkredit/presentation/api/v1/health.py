"""Health check endpoint for service monitoring."""

from fastapi import APIRouter
from pydantic import BaseModel

from zkredit import __version__
from zkredit.core.config import settings

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    network: str
    event_store: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        network=settings.ledger_network,
        event_store=settings.event_store_backend,
    )
