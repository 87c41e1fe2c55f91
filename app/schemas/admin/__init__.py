"""Super-admin schemas package."""

from app.schemas.admin.admin_user import (
    UserCreatedResponse,
    UserFilters,
    UserListResponse,
    UserToggleResponse,
)
from app.schemas.admin.dashboard import (
    DashboardResponse,
    DomainComplaintCount,
    UserRoleStats,
)

__all__ = [
    "UserFilters",
    "UserListResponse",
    "UserCreatedResponse",
    "UserToggleResponse",
    "UserRoleStats",
    "DomainComplaintCount",
    "DashboardResponse",
]
