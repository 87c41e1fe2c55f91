"""Audit services package."""

from app.services.audit.audit_log_service import AuditLogService

__all__ = ["AuditLogService"]
