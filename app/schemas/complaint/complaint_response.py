"""
Complaint response schemas.

Each role sees a different projection of the same row:

- students see the acknowledgement flag on their own complaints
- sub-admins also see the owning student's user id
- super-admins also see the owning student's name, email and student number
- anonymous callers see only resolved complaints with no student identity
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional, Union

from pydantic import ConfigDict, Field

from app.models.base.enums import ComplaintPriority, ComplaintStatus
from app.schemas.common.base import BaseSchema

__all__ = [
    "ComplaintView",
    "StudentComplaintView",
    "AdminComplaintView",
    "SuperAdminComplaintView",
    "PublicComplaintView",
    "AnyComplaintView",
    "ComplaintEnvelope",
    "ComplaintListResponse",
    "ComplaintMutationResponse",
    "PublicComplaintListResponse",
    "TransferView",
    "TransferListResponse",
]


class ComplaintView(BaseSchema):
    """Fields every authenticated viewer receives."""

    # Unknown keys are rejected so a narrower view never absorbs a wider one
    model_config = ConfigDict(extra="forbid")

    id: int
    title: str
    description: str
    domain_id: int
    domain_name: Optional[str] = None
    status: ComplaintStatus
    priority: ComplaintPriority
    resolution_details: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class StudentComplaintView(ComplaintView):
    admin_seen: bool = False
    admin_read_at: Optional[datetime] = None


class AdminComplaintView(StudentComplaintView):
    student_id: int


class SuperAdminComplaintView(AdminComplaintView):
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    student_number: Optional[str] = None


class PublicComplaintView(BaseSchema):
    """Redacted view of a resolved complaint."""

    id: int
    title: str
    resolution_details: Optional[str] = None
    resolved_at: Optional[datetime] = None
    domain_name: Optional[str] = None


# Narrowest first: each view forbids the keys only a wider view carries
AnyComplaintView = Annotated[
    Union[StudentComplaintView, AdminComplaintView, SuperAdminComplaintView],
    Field(union_mode="left_to_right"),
]


class ComplaintEnvelope(BaseSchema):
    complaint: AnyComplaintView


class ComplaintMutationResponse(BaseSchema):
    message: str
    complaint: AnyComplaintView


class ComplaintListResponse(BaseSchema):
    complaints: List[AnyComplaintView]


class PublicComplaintListResponse(BaseSchema):
    complaints: List[PublicComplaintView]


class TransferView(BaseSchema):
    id: int
    complaint_id: int
    from_domain_id: int
    from_domain_name: str
    to_domain_id: int
    to_domain_name: str
    transferred_by: int
    transferred_by_name: str
    transfer_reason: str
    created_at: datetime


class TransferListResponse(BaseSchema):
    transfers: List[TransferView]
