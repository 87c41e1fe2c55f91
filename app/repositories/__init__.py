"""Data access layer."""

from app.repositories.audit import AuditLogRepository
from app.repositories.base import BaseRepository
from app.repositories.complaint import ComplaintRepository, ComplaintTransferRepository
from app.repositories.domain import DomainRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "AuditLogRepository",
    "ComplaintRepository",
    "ComplaintTransferRepository",
    "DomainRepository",
    "UserRepository",
]
