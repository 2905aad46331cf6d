# External package imports
from fastapi import APIRouter

# Local application imports
from ...application.dto.device_dto import HealthResponse
from ...core.config import get_settings


router = APIRouter(tags=["health"])


@router.get("", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness endpoint; does not touch the registry or Kubernetes"""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.service_version,
    )
