"""
Audit log service.

Writes entries inside the caller's transaction so an audited change and its
entry commit or roll back together, and serves the admin audit console.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.audit import AuditLog
from app.models.base.enums import AuditAction, ResourceType
from app.repositories.audit import AuditLogRepository
from app.schemas.audit import AuditLogFilters, AuditLogListResponse, AuditLogResponse, RecentActivity
from app.schemas.common.response import PaginationMeta
from app.services.base import BaseService


class AuditLogService(BaseService):
    """Append-only audit sink plus read access for super-admins."""

    def __init__(self, db_session: Session, repository: Optional[AuditLogRepository] = None):
        super().__init__(db_session)
        self.repository = repository or AuditLogRepository(db_session)

    def record(
        self,
        user_id: Optional[int],
        action: AuditAction,
        resource_type: ResourceType,
        resource_id: Optional[int] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        """
        Stage one audit entry; the surrounding transaction commits it.

        Does not open or commit a transaction of its own.
        """
        entry = self.repository.create_audit_log(
            user_id=user_id,
            action=action,
            resource_type=resource_type.value,
            resource_id=resource_id,
            old_values=old_values,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._logger.debug(
            "Audit entry staged",
            extra={"action": action.value, "resource_type": resource_type.value, "resource_id": resource_id},
        )
        return entry

    def list_logs(self, filters: AuditLogFilters) -> AuditLogListResponse:
        logs, total = self.repository.search(
            page=filters.page,
            limit=filters.limit,
            action=filters.action,
            resource_type=filters.resource_type,
            user_id=filters.user_id,
        )
        return AuditLogListResponse(
            logs=[AuditLogResponse.model_validate(log) for log in logs],
            pagination=PaginationMeta.create(filters.page, filters.limit, total),
        )

    def recent_activity(self, limit: int = 10) -> List[RecentActivity]:
        return [RecentActivity.model_validate(log) for log in self.repository.recent(limit)]
