"""
Organizational domain model.

Domains are the departments complaints are filed against and that
sub-admins are attached to.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel
from app.models.base.mixins import CreatedAtMixin

__all__ = ["Domain", "DEFAULT_DOMAINS"]

DEFAULT_DOMAINS = (
    ("Hostel", "Hostel related complaints"),
    ("IET", "Institute of Engineering and Technology"),
    ("IM", "Institute of Management"),
    ("Design", "Design Department"),
    ("Council", "Student Council"),
    ("VC Office", "Vice Chancellor Office"),
)


class Domain(BaseModel, CreatedAtMixin):
    """Department that owns complaints and employs sub-admins."""

    __tablename__ = "domains"

    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="Unique domain name",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Domain(id={self.id}, name='{self.name}')>"
