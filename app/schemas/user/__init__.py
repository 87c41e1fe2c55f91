"""User schemas package."""

from app.schemas.user.user_response import (
    ComplaintStats,
    DomainListResponse,
    DomainResponse,
    ProfileResponse,
    StatsResponse,
    UserResponse,
)

__all__ = [
    "UserResponse",
    "ProfileResponse",
    "DomainResponse",
    "DomainListResponse",
    "ComplaintStats",
    "StatsResponse",
]
