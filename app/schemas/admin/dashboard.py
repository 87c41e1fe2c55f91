"""
Super-admin dashboard schemas.
"""

from __future__ import annotations

from typing import List

from app.schemas.audit.audit_log_response import RecentActivity
from app.schemas.common.base import BaseSchema
from app.schemas.user.user_response import ComplaintStats

__all__ = [
    "UserRoleStats",
    "DomainComplaintCount",
    "DashboardResponse",
]

class UserRoleStats(BaseSchema):
    total: int = 0
    students: int = 0
    sub_admins: int = 0
    super_admins: int = 0
    inactive: int = 0

class DomainComplaintCount(BaseSchema):
    id: int
    name: str
    complaint_count: int = 0

class DashboardResponse(BaseSchema):
    user_stats: UserRoleStats
    complaint_stats: ComplaintStats
    domain_stats: List[DomainComplaintCount]
    recent_activity: List[RecentActivity]
