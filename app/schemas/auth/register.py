"""
Account creation schemas.

Self-registration may only create students and sub-admins; super-admins
creating accounts may also create other super-admins.
"""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, model_validator

from app.models.base import MAX_ID
from app.models.base.enums import UserRole
from app.schemas.common.base import BaseSchema

__all__ = ["RegisterRequest", "UserCreateRequest"]


class UserCreateRequest(BaseSchema):
    """Body of POST /admin/users."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=2, max_length=255)
    role: UserRole
    student_number: Optional[str] = Field(default=None, alias="studentId", min_length=5, max_length=50)
    domain_id: Optional[int] = Field(default=None, gt=0, le=MAX_ID)

    @model_validator(mode="after")
    def check_role_fields(self) -> "UserCreateRequest":
        if self.role == UserRole.SUB_ADMIN and self.domain_id is None:
            raise ValueError("Domain is required for sub-admins")
        if self.role == UserRole.STUDENT and not self.student_number:
            raise ValueError("Student ID is required for students")
        return self


class RegisterRequest(UserCreateRequest):
    """Body of POST /auth/register."""

    @model_validator(mode="after")
    def check_self_service_role(self) -> "RegisterRequest":
        if self.role == UserRole.SUPER_ADMIN:
            raise ValueError("Role must be student or sub_admin")
        return self
