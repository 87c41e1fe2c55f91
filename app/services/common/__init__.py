"""Shared service-layer helpers."""

from app.services.common.permissions import (
    Actor,
    StudentActor,
    SubAdminActor,
    SuperAdminActor,
    actor_from_user,
    require_role,
    role_in,
)

__all__ = [
    "Actor",
    "StudentActor",
    "SubAdminActor",
    "SuperAdminActor",
    "actor_from_user",
    "require_role",
    "role_in",
]
