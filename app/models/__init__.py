# models/__init__.py
from .base import Base
from .domain import Domain
from .user import User
from .complaint import Complaint, ComplaintTransfer
from .audit import AuditLog

__all__ = [
    "Base",
    "Domain",
    "User",
    "Complaint",
    "ComplaintTransfer",
    "AuditLog",
]
