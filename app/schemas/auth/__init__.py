"""Authentication schemas package."""

from app.schemas.auth.login import LoginRequest
from app.schemas.auth.register import RegisterRequest, UserCreateRequest
from app.schemas.auth.token import AuthResponse

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "UserCreateRequest",
    "AuthResponse",
]
