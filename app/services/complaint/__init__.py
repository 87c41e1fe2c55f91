"""Complaint services package."""

from app.services.complaint.complaint_policy import ACTION_ROLES, ComplaintAction, ComplaintPolicy
from app.services.complaint.complaint_service import ComplaintService

__all__ = [
    "ACTION_ROLES",
    "ComplaintAction",
    "ComplaintPolicy",
    "ComplaintService",
]
