"""
Complaint schemas package.

Request bodies for the complaint lifecycle and the per-role views a
complaint is projected to before leaving the API.
"""

from app.schemas.complaint.complaint_base import (
    ComplaintCreate,
    ComplaintFilters,
    ComplaintStatusUpdate,
    ComplaintTransferRequest,
)
from app.schemas.complaint.complaint_response import (
    AdminComplaintView,
    ComplaintEnvelope,
    ComplaintListResponse,
    ComplaintMutationResponse,
    ComplaintView,
    PublicComplaintListResponse,
    PublicComplaintView,
    StudentComplaintView,
    SuperAdminComplaintView,
    TransferListResponse,
    TransferView,
)

__all__ = [
    "ComplaintCreate",
    "ComplaintFilters",
    "ComplaintStatusUpdate",
    "ComplaintTransferRequest",
    "ComplaintView",
    "StudentComplaintView",
    "AdminComplaintView",
    "SuperAdminComplaintView",
    "PublicComplaintView",
    "ComplaintEnvelope",
    "ComplaintListResponse",
    "ComplaintMutationResponse",
    "PublicComplaintListResponse",
    "TransferView",
    "TransferListResponse",
]
