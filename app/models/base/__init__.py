"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from app.models.base.base_model import MAX_ID, Base, BaseModel, enum_type, utcnow
from app.models.base.mixins import CreatedAtMixin, TimestampMixin
from app.models.base.enums import (
    AuditAction,
    ComplaintPriority,
    ComplaintStatus,
    ResourceType,
    UserRole,
)

__all__ = [
    "MAX_ID",
    "Base",
    "BaseModel",
    "enum_type",
    "utcnow",
    "CreatedAtMixin",
    "TimestampMixin",
    "AuditAction",
    "ComplaintPriority",
    "ComplaintStatus",
    "ResourceType",
    "UserRole",
]
