"""Audit log schemas package."""

from app.schemas.audit.audit_log_response import (
    AuditLogFilters,
    AuditLogListResponse,
    AuditLogResponse,
    RecentActivity,
)

__all__ = [
    "AuditLogFilters",
    "AuditLogResponse",
    "AuditLogListResponse",
    "RecentActivity",
]
