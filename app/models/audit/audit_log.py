"""
Audit log model.

Append-only trail of every state-changing action, with before and after
snapshots stored as JSON.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel, enum_type
from app.models.base.enums import AuditAction
from app.models.base.mixins import CreatedAtMixin

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = ["AuditLog"]

JSONType = JSON().with_variant(JSONB(), "postgresql")


class AuditLog(BaseModel, CreatedAtMixin):
    """
    Single audit entry.

    Attributes:
        user_id: Acting user
        action: Action tag
        resource_type: Kind of resource touched (complaint, user)
        resource_id: Identifier of the touched resource
        old_values: Snapshot before the change
        new_values: Snapshot after the change
        ip_address: Client address, when known
        user_agent: Client user agent, when known
    """

    __tablename__ = "audit_logs"

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    action: Mapped[AuditAction] = mapped_column(
        enum_type(AuditAction, "audit_action_enum"),
        nullable=False,
        index=True,
    )

    resource_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )

    resource_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    old_values: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    new_values: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user: Mapped[Optional["User"]] = relationship("User", lazy="joined")

    @property
    def user_name(self) -> Optional[str]:
        return self.user.name if self.user is not None else None

    @property
    def user_email(self) -> Optional[str]:
        return self.user.email if self.user is not None else None
