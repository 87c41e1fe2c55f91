"""
Audit log repository for system activity tracking.

Entries are only ever inserted; reads page through them newest first.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.audit import AuditLog
from app.models.base.enums import AuditAction
from app.repositories.base.base_repository import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """
    Repository for the append-only audit trail.
    """

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        super().__init__(AuditLog, db)

    # ==================== Create Operations ====================

    def create_audit_log(
        self,
        user_id: Optional[int],
        action: AuditAction,
        resource_type: str,
        resource_id: Optional[int] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        """
        Stage a new audit log entry in the current transaction.

        Args:
            user_id: User who performed the action
            action: Action tag
            resource_type: Type of resource affected
            resource_id: ID of affected resource
            old_values: Previous values (for updates)
            new_values: New values (for creates/updates)
            ip_address: Client address
            user_agent: Client user agent

        Returns:
            Created AuditLog instance
        """
        return self.add(
            AuditLog(
                user_id=user_id,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                old_values=old_values,
                new_values=new_values,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )

    # ==================== Query Operations ====================

    def search(
        self,
        page: int,
        limit: int,
        action: Optional[AuditAction] = None,
        resource_type: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Tuple[Sequence[AuditLog], int]:
        stmt = select(AuditLog)
        if action is not None:
            stmt = stmt.where(AuditLog.action == action)
        if resource_type:
            stmt = stmt.where(AuditLog.resource_type == resource_type)
        if user_id is not None:
            stmt = stmt.where(AuditLog.user_id == user_id)

        stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        return self.paginate(stmt, page, limit)

    def recent(self, limit: int = 10) -> List[AuditLog]:
        stmt = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)
        return self.find_all(stmt)

    def for_resource(self, resource_type: str, resource_id: int) -> List[AuditLog]:
        stmt = (
            select(AuditLog)
            .where(AuditLog.resource_type == resource_type, AuditLog.resource_id == resource_id)
            .order_by(AuditLog.created_at, AuditLog.id)
        )
        return self.find_all(stmt)
