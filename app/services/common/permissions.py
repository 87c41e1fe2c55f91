# app/services/common/permissions.py
"""
Authenticated actors and role checks.

An actor is the authenticated caller seen by the service layer. It is a
closed set of three variants, one per role; code that depends on the role
matches on the variant instead of comparing role strings, and a sub-admin
always carries the domain it manages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Union

from app.core.exceptions import PermissionError
from app.models.base.enums import UserRole
from app.models.user.user import User


@dataclass(frozen=True)
class StudentActor:
    """A student; sees and files only their own complaints."""
    user_id: int
    role: ClassVar[UserRole] = UserRole.STUDENT


@dataclass(frozen=True)
class SubAdminActor:
    """A domain administrator; works the complaints of one domain."""
    user_id: int
    domain_id: Optional[int]
    role: ClassVar[UserRole] = UserRole.SUB_ADMIN


@dataclass(frozen=True)
class SuperAdminActor:
    """An institution-wide administrator."""
    user_id: int
    role: ClassVar[UserRole] = UserRole.SUPER_ADMIN


Actor = Union[StudentActor, SubAdminActor, SuperAdminActor]


def actor_from_user(user: User) -> Actor:
    """
    Build the actor variant matching a user's role.

    Raises:
        ValueError: If the stored role is not one of the known roles
    """
    if user.role == UserRole.STUDENT:
        return StudentActor(user_id=user.id)
    if user.role == UserRole.SUB_ADMIN:
        return SubAdminActor(user_id=user.id, domain_id=user.domain_id)
    if user.role == UserRole.SUPER_ADMIN:
        return SuperAdminActor(user_id=user.id)
    raise ValueError(f"Unknown role: {user.role!r}")


def role_in(actor: Actor, allowed_roles: Iterable[UserRole]) -> bool:
    """Check if the actor's role is in the allowed set."""
    return actor.role in set(allowed_roles)


def require_role(
    actor: Actor,
    allowed_roles: Iterable[UserRole],
    *,
    error_message: Optional[str] = None,
) -> None:
    """
    Assert that actor has one of the allowed roles.

    Args:
        actor: The authenticated caller
        allowed_roles: Set of allowed roles
        error_message: Custom error message

    Raises:
        PermissionError: If actor lacks required role

    Example:
        >>> require_role(actor, [UserRole.SUPER_ADMIN])
    """
    allowed = list(allowed_roles)
    if not role_in(actor, allowed):
        raise PermissionError(
            error_message or "Insufficient permissions",
            required_roles=[r.value for r in allowed],
            role=actor.role.value,
        )
