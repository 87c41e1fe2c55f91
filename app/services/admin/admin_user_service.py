# app/services/admin/admin_user_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, UserNotFoundError
from app.core.security import PasswordHasher
from app.models.base.enums import AuditAction, ResourceType, UserRole
from app.models.user.user import User
from app.repositories.domain import DomainRepository
from app.repositories.user import UserRepository
from app.schemas.admin import (
    DashboardResponse,
    DomainComplaintCount,
    UserFilters,
    UserListResponse,
    UserRoleStats,
)
from app.schemas.audit import AuditLogFilters, AuditLogListResponse
from app.schemas.auth import UserCreateRequest
from app.schemas.common.response import PaginationMeta
from app.schemas.user import UserResponse
from app.services.audit import AuditLogService
from app.services.base import BaseService
from app.services.common.permissions import Actor, require_role
from app.services.users.user_service import UserService

SUPER_ADMIN_ONLY = (UserRole.SUPER_ADMIN,)


class AdminService(BaseService):
    """
    Super-admin console:

    - Paged user directory with filters
    - Account creation for any role
    - Enabling and disabling accounts
    - Audit log browsing
    - Institution-wide dashboard
    """

    def __init__(
        self,
        db_session: Session,
        password_hasher: Optional[PasswordHasher] = None,
    ) -> None:
        super().__init__(db_session)
        self.users = UserRepository(db_session)
        self.domains = DomainRepository(db_session)
        self.audit = AuditLogService(db_session)
        self.accounts = UserService(db_session, password_hasher=password_hasher)

    def _ensure_super_admin(self, actor: Actor) -> None:
        require_role(actor, SUPER_ADMIN_ONLY, error_message="Super admin access required")

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #
    def list_users(self, actor: Actor, filters: UserFilters) -> UserListResponse:
        self._ensure_super_admin(actor)
        users, total = self.users.search(
            page=filters.page,
            limit=filters.limit,
            role=filters.role,
            domain_id=filters.domain,
            search=filters.search,
        )
        return UserListResponse(
            users=[UserResponse.model_validate(u) for u in users],
            pagination=PaginationMeta.create(filters.page, filters.limit, total),
        )

    def create_user(self, actor: Actor, data: UserCreateRequest) -> User:
        self._ensure_super_admin(actor)
        return self.accounts.create_account(data, AuditAction.CREATE_USER, created_by=actor.user_id)

    def toggle_user(self, actor: Actor, user_id: int) -> User:
        """
        Flip a user's active flag.

        Raises:
        - ConflictError when an admin tries to disable their own account
        - UserNotFoundError for unknown users
        """
        self._ensure_super_admin(actor)
        if user_id == actor.user_id:
            raise ConflictError("Cannot disable your own account")

        with self.transaction():
            user = self.users.get_for_update(user_id)
            if user is None:
                raise UserNotFoundError(user_id)

            was_active = user.is_active
            user.is_active = not was_active

            self.audit.record(
                actor.user_id,
                AuditAction.DISABLE_USER if was_active else AuditAction.ENABLE_USER,
                ResourceType.USER,
                user.id,
                old_values={"isActive": was_active},
                new_values={"isActive": user.is_active},
            )

        self._logger.info(
            "User active flag toggled",
            extra={"target_user_id": user.id, "is_active": user.is_active},
        )
        return user

    # ------------------------------------------------------------------ #
    # Audit & dashboard
    # ------------------------------------------------------------------ #
    def audit_logs(self, actor: Actor, filters: AuditLogFilters) -> AuditLogListResponse:
        self._ensure_super_admin(actor)
        return self.audit.list_logs(filters)

    def dashboard(self, actor: Actor) -> DashboardResponse:
        self._ensure_super_admin(actor)
        complaint_stats = self.accounts.stats(actor)

        return DashboardResponse(
            user_stats=UserRoleStats.model_validate(self.users.role_counts()),
            complaint_stats=complaint_stats,
            domain_stats=[
                DomainComplaintCount.model_validate(row) for row in self.domains.complaint_counts()
            ],
            recent_activity=self.audit.recent_activity(10),
        )
