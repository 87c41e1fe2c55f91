"""
Audit log schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.models.base.enums import AuditAction
from app.schemas.common.base import BaseSchema
from app.schemas.common.response import PaginationMeta

__all__ = [
    "AuditLogFilters",
    "AuditLogResponse",
    "AuditLogListResponse",
    "RecentActivity",
]


class AuditLogFilters(BaseSchema):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    action: Optional[AuditAction] = None
    resource_type: Optional[str] = None
    user_id: Optional[int] = None


class AuditLogResponse(BaseSchema):
    id: int
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    action: AuditAction
    resource_type: str
    resource_id: Optional[int] = None
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


class AuditLogListResponse(BaseSchema):
    logs: List[AuditLogResponse]
    pagination: PaginationMeta


class RecentActivity(BaseSchema):
    action: AuditAction
    resource_type: str
    created_at: datetime
    user_name: Optional[str] = None
