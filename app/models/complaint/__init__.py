"""
Complaint models package.

Models:
    - Complaint: Complaint filed by a student against a domain
    - ComplaintTransfer: Append-only record of a domain change
"""

from app.models.complaint.complaint import Complaint
from app.models.complaint.complaint_transfer import ComplaintTransfer

__all__ = ["Complaint", "ComplaintTransfer"]
