"""
Authorization policy for complaints.

Decides, for a given actor, which operations are permitted, which
complaints are visible, and which fields of a visible complaint are shown.
Visibility is expressed as a SQL predicate that repositories fold into
their queries, so a complaint outside the actor's scope is reported as
missing rather than forbidden.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from sqlalchemy import true
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import PermissionError
from app.models.base.enums import UserRole
from app.models.complaint.complaint import Complaint
from app.schemas.complaint import (
    AdminComplaintView,
    PublicComplaintView,
    StudentComplaintView,
    SuperAdminComplaintView,
)
from app.services.common.permissions import (
    Actor,
    StudentActor,
    SubAdminActor,
    SuperAdminActor,
    role_in,
)


class ComplaintAction(str, Enum):
    CREATE = "create"
    LIST = "list"
    VIEW = "view"
    UPDATE_STATUS = "update_status"
    MARK_SEEN = "mark_seen"
    TRANSFER = "transfer"


_EVERYONE = frozenset(UserRole)
_ADMINS = frozenset({UserRole.SUB_ADMIN, UserRole.SUPER_ADMIN})

ACTION_ROLES: Dict[ComplaintAction, FrozenSet[UserRole]] = {
    ComplaintAction.CREATE: frozenset({UserRole.STUDENT}),
    ComplaintAction.LIST: _EVERYONE,
    ComplaintAction.VIEW: _EVERYONE,
    ComplaintAction.UPDATE_STATUS: _ADMINS,
    ComplaintAction.MARK_SEEN: _ADMINS,
    ComplaintAction.TRANSFER: _ADMINS,
}

_DENIED_MESSAGES = {
    ComplaintAction.CREATE: "Only students can create complaints",
}

ComplaintViewModel = Union[StudentComplaintView, AdminComplaintView, SuperAdminComplaintView]


class ComplaintPolicy:
    """Role rules for complaint operations."""

    def can(self, actor: Actor, action: ComplaintAction) -> bool:
        return role_in(actor, ACTION_ROLES[action])

    def ensure_can(self, actor: Actor, action: ComplaintAction) -> None:
        """
        Raises:
            PermissionError: If the actor's role may not perform ``action``
        """
        if not self.can(actor, action):
            raise PermissionError(
                _DENIED_MESSAGES.get(action, "Admin access required"),
                required_roles=sorted(role.value for role in ACTION_ROLES[action]),
                role=actor.role.value,
            )

    def scope(self, actor: Actor) -> ColumnElement[bool]:
        """Predicate selecting the complaints ``actor`` may see."""
        if isinstance(actor, StudentActor):
            return Complaint.student_id == actor.user_id
        if isinstance(actor, SubAdminActor):
            return Complaint.domain_id == actor.domain_id
        if isinstance(actor, SuperAdminActor):
            return true()
        raise TypeError(f"Unsupported actor: {actor!r}")

    def project(self, actor: Actor, complaint: Complaint) -> ComplaintViewModel:
        """Render a complaint with the fields ``actor``'s role may read."""
        if isinstance(actor, StudentActor):
            return StudentComplaintView.model_validate(complaint)
        if isinstance(actor, SubAdminActor):
            return AdminComplaintView.model_validate(complaint)
        if isinstance(actor, SuperAdminActor):
            return SuperAdminComplaintView.model_validate(complaint)
        raise TypeError(f"Unsupported actor: {actor!r}")

    @staticmethod
    def project_public(complaint: Complaint) -> PublicComplaintView:
        return PublicComplaintView.model_validate(complaint)
