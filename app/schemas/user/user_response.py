"""
User and domain response schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models.base.enums import UserRole
from app.schemas.common.base import BaseSchema

__all__ = [
    "UserResponse",
    "ProfileResponse",
    "DomainResponse",
    "DomainListResponse",
    "ComplaintStats",
    "StatsResponse",
]


class UserResponse(BaseSchema):
    """Public representation of a user account (never includes the hash)."""

    id: int
    email: str
    name: str
    role: UserRole
    student_number: Optional[str] = Field(default=None, alias="studentId")
    domain_id: Optional[int] = None
    domain_name: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


class ProfileResponse(BaseSchema):
    user: UserResponse


class DomainResponse(BaseSchema):
    id: int
    name: str
    description: Optional[str] = None


class DomainListResponse(BaseSchema):
    domains: List[DomainResponse]


class ComplaintStats(BaseSchema):
    """Complaint counts by status within the caller's scope."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    resolved: int = 0
    rejected: int = 0


class StatsResponse(BaseSchema):
    stats: ComplaintStats
