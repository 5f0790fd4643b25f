"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from stars.domain.service import RateableRegistry

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    rateable_types: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check(registry: FromDishka[RateableRegistry]) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status and the rateable types this instance accepts
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        rateable_types=sorted(registry.names()),
    )
