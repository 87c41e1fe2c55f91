"""Audit trail models package."""

from app.models.audit.audit_log import AuditLog

__all__ = ["AuditLog"]
