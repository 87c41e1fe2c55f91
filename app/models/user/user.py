"""
User account model.

A user holds exactly one role. Students carry an institutional student
number; sub-admins are attached to one domain.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel, enum_type
from app.models.base.enums import UserRole
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.domain.domain import Domain

__all__ = ["User"]


class User(BaseModel, TimestampMixin):
    """
    Authenticated principal of the system.

    Attributes:
        email: Unique login email, stored lower-cased
        password_hash: bcrypt hash of the password
        role: One of student, sub_admin, super_admin
        name: Display name
        student_number: Institutional student ID (students only)
        domain_id: Domain a sub-admin manages
        is_active: Disabled accounts cannot authenticate
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    role: Mapped[UserRole] = mapped_column(
        enum_type(UserRole, "user_role_enum"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    student_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Institutional student ID",
    )

    domain_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("domains.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    domain: Mapped[Optional["Domain"]] = relationship("Domain", lazy="joined")

    @property
    def domain_name(self) -> Optional[str]:
        return self.domain.name if self.domain is not None else None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
