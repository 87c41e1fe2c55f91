"""
Complaint transfer history.

One row per domain change; rows are never updated or deleted.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.mixins import CreatedAtMixin

if TYPE_CHECKING:
    from app.models.domain.domain import Domain
    from app.models.user.user import User

__all__ = ["ComplaintTransfer"]


class ComplaintTransfer(BaseModel, CreatedAtMixin):
    """Record of a complaint moving from one domain to another."""

    __tablename__ = "complaint_transfers"

    complaint_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("complaints.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    from_domain_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domains.id"),
        nullable=False,
    )

    to_domain_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domains.id"),
        nullable=False,
    )

    transferred_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )

    transfer_reason: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    from_domain: Mapped["Domain"] = relationship("Domain", foreign_keys=[from_domain_id], lazy="joined")
    to_domain: Mapped["Domain"] = relationship("Domain", foreign_keys=[to_domain_id], lazy="joined")
    transferred_by_user: Mapped["User"] = relationship("User", foreign_keys=[transferred_by], lazy="joined")

    @property
    def from_domain_name(self) -> str:
        return self.from_domain.name

    @property
    def to_domain_name(self) -> str:
        return self.to_domain.name

    @property
    def transferred_by_name(self) -> str:
        return self.transferred_by_user.name
