"""
Liveness endpoints.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_app_settings
from app.config.settings import Settings
from app.schemas.common.response import HealthResponse

router = APIRouter(tags=["Health"])


def _health(settings: Settings) -> HealthResponse:
    return HealthResponse(
        status="OK",
        message=f"{settings.PROJECT_NAME} is running",
        version=settings.PROJECT_VERSION,
    )


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return _health(settings)


root_router = APIRouter(tags=["Health"])


@root_router.get("/", response_model=HealthResponse)
def root(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return _health(settings)
