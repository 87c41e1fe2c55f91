"""
Super-admin console endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.deps import get_admin_service, get_current_actor
from app.models.base import MAX_ID
from app.models.base.enums import AuditAction, UserRole
from app.schemas.admin import (
    DashboardResponse,
    UserCreatedResponse,
    UserFilters,
    UserListResponse,
    UserToggleResponse,
)
from app.schemas.audit import AuditLogFilters, AuditLogListResponse
from app.schemas.auth import UserCreateRequest
from app.schemas.user import UserResponse
from app.services.admin import AdminService
from app.services.common.permissions import Actor

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/users", response_model=UserListResponse)
def list_users(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    role: Optional[UserRole] = None,
    domain: Optional[int] = Query(default=None, gt=0, le=MAX_ID),
    search: Optional[str] = Query(default=None, max_length=255),
    actor: Actor = Depends(get_current_actor),
    service: AdminService = Depends(get_admin_service),
) -> UserListResponse:
    filters = UserFilters(page=page, limit=limit, role=role, domain=domain, search=search)
    return service.list_users(actor, filters)


@router.post("/users", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreateRequest,
    actor: Actor = Depends(get_current_actor),
    service: AdminService = Depends(get_admin_service),
) -> UserCreatedResponse:
    """Create an account of any role."""
    user = service.create_user(actor, payload)
    return UserCreatedResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


@router.put("/users/{user_id}/toggle", response_model=UserToggleResponse)
def toggle_user(
    user_id: int = Path(..., gt=0, le=MAX_ID),
    actor: Actor = Depends(get_current_actor),
    service: AdminService = Depends(get_admin_service),
) -> UserToggleResponse:
    """Enable a disabled account or disable an active one."""
    user = service.toggle_user(actor, user_id)
    state = "enabled" if user.is_active else "disabled"
    return UserToggleResponse(
        message=f"User {state} successfully",
        user=UserResponse.model_validate(user),
    )


@router.get("/audit-logs", response_model=AuditLogListResponse)
def list_audit_logs(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    action: Optional[AuditAction] = None,
    resource_type: Optional[str] = Query(default=None, alias="resourceType"),
    user_id: Optional[int] = Query(default=None, alias="userId", gt=0, le=MAX_ID),
    actor: Actor = Depends(get_current_actor),
    service: AdminService = Depends(get_admin_service),
) -> AuditLogListResponse:
    filters = AuditLogFilters(
        page=page,
        limit=limit,
        action=action,
        resource_type=resource_type,
        user_id=user_id,
    )
    return service.audit_logs(actor, filters)


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    actor: Actor = Depends(get_current_actor),
    service: AdminService = Depends(get_admin_service),
) -> DashboardResponse:
    return service.dashboard(actor)
