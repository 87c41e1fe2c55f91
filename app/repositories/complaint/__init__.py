"""Complaint repositories package."""

from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.repositories.complaint.complaint_transfer_repository import ComplaintTransferRepository

__all__ = ["ComplaintRepository", "ComplaintTransferRepository"]
