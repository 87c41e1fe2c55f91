"""Audit repositories package."""

from app.repositories.audit.audit_log_repository import AuditLogRepository

__all__ = ["AuditLogRepository"]
