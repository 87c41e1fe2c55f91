"""
Super-admin user management schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from app.models.base.enums import UserRole
from app.schemas.common.base import BaseSchema
from app.schemas.common.response import PaginationMeta
from app.schemas.user.user_response import UserResponse

__all__ = [
    "UserFilters",
    "UserListResponse",
    "UserCreatedResponse",
    "UserToggleResponse",
]


class UserFilters(BaseSchema):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    role: Optional[UserRole] = None
    domain: Optional[int] = None
    search: Optional[str] = Field(default=None, max_length=255)


class UserListResponse(BaseSchema):
    users: List[UserResponse]
    pagination: PaginationMeta


class UserCreatedResponse(BaseSchema):
    message: str
    user: UserResponse


class UserToggleResponse(BaseSchema):
    message: str
    user: UserResponse
