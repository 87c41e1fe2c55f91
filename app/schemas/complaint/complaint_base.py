"""
Complaint request schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from app.models.base import MAX_ID
from app.models.base.enums import ComplaintPriority, ComplaintStatus
from app.schemas.common.base import BaseSchema

__all__ = [
    "ComplaintCreate",
    "ComplaintStatusUpdate",
    "ComplaintTransferRequest",
    "ComplaintFilters",
]


class ComplaintCreate(BaseSchema):
    """Body of POST /complaints."""

    title: str = Field(..., min_length=5, max_length=255)
    description: str = Field(..., min_length=10)
    domain_id: int = Field(..., gt=0, le=MAX_ID, description="Target domain")
    priority: ComplaintPriority = ComplaintPriority.MEDIUM


class ComplaintStatusUpdate(BaseSchema):
    """Body of PUT /complaints/{id}."""

    status: ComplaintStatus
    resolution_details: Optional[str] = None

    @field_validator("resolution_details")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ComplaintTransferRequest(BaseSchema):
    """Body of POST /complaints/{id}/transfer."""

    to_domain_id: int = Field(..., gt=0, le=MAX_ID)
    reason: str = Field(..., min_length=5)


class ComplaintFilters(BaseSchema):
    """Optional narrowing of the complaint listing."""

    status: Optional[ComplaintStatus] = None
    priority: Optional[ComplaintPriority] = None
