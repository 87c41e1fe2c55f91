"""
Core complaint model with lifecycle tracking.

Handles complaint status, resolution details and the admin acknowledgement
flag, plus relationships with the owning student and the current domain.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel, enum_type
from app.models.base.enums import ComplaintPriority, ComplaintStatus
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.domain.domain import Domain
    from app.models.user.user import User

__all__ = ["Complaint"]


class Complaint(BaseModel, TimestampMixin):
    """
    Complaint filed by a student against a domain.

    Attributes:
        title: Brief complaint summary
        description: Detailed complaint description
        domain_id: Domain currently responsible (changes only by transfer)
        student_id: Owning student user (never changes)
        status: Current lifecycle status
        priority: Priority chosen by the student
        resolution_details: Resolution notes recorded when resolved
        resolved_at: Set when resolved with resolution details
        admin_seen: Whether an admin acknowledged the complaint
        admin_read_at: Time of the latest acknowledgement
    """

    __tablename__ = "complaints"
    __table_args__ = (
        Index("ix_complaints_domain_status", "domain_id", "status"),
        Index("ix_complaints_status_resolved_at", "status", "resolved_at"),
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    domain_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domains.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    status: Mapped[ComplaintStatus] = mapped_column(
        enum_type(ComplaintStatus, "complaint_status_enum"),
        nullable=False,
        default=ComplaintStatus.PENDING,
        index=True,
    )

    priority: Mapped[ComplaintPriority] = mapped_column(
        enum_type(ComplaintPriority, "complaint_priority_enum"),
        nullable=False,
        default=ComplaintPriority.MEDIUM,
    )

    resolution_details: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    resolved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    admin_seen: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    admin_read_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    domain: Mapped["Domain"] = relationship("Domain", lazy="joined")
    student: Mapped["User"] = relationship("User", lazy="joined", foreign_keys=[student_id])

    # ===== Projection helpers =====

    @property
    def domain_name(self) -> Optional[str]:
        return self.domain.name if self.domain is not None else None

    @property
    def student_name(self) -> Optional[str]:
        return self.student.name if self.student is not None else None

    @property
    def student_email(self) -> Optional[str]:
        return self.student.email if self.student is not None else None

    @property
    def student_number(self) -> Optional[str]:
        return self.student.student_number if self.student is not None else None

    def __repr__(self) -> str:
        return f"<Complaint(id={self.id}, status='{self.status.value}', domain_id={self.domain_id})>"
