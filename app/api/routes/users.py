"""
Signed-in user endpoints plus the public domain list.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_current_actor, get_user_service
from app.schemas.user import DomainListResponse, ProfileResponse, StatsResponse
from app.services.common.permissions import Actor
from app.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/domains", response_model=DomainListResponse)
def list_domains(service: UserService = Depends(get_user_service)) -> DomainListResponse:
    """All domains ordered by name. No login required."""
    return service.list_domains()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    return ProfileResponse(user=service.profile(actor))


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> StatsResponse:
    """Complaint counts by status within the caller's visibility."""
    return StatsResponse(stats=service.stats(actor))
