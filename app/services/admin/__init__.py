"""Super-admin services package."""

from app.services.admin.admin_user_service import AdminService

__all__ = ["AdminService"]
