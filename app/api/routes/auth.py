"""
Authentication endpoints: registration and login.

Both share a strict per-IP attempt limit.
"""

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_auth_service
from app.core.rate_limiting import client_ip, enforce_auth_rate_limit
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.services.auth import AuthService

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    dependencies=[Depends(enforce_auth_rate_limit)],
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create a student or sub-admin account and return a token for it."""
    return auth_service.register(payload)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    return auth_service.login(
        payload,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
