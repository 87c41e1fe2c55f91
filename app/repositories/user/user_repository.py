"""
User repository.

Lookup by email, filtered paging for the admin console and role counts for
the dashboard.
"""

from typing import Dict, Optional, Sequence, Tuple

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session

from app.models.base.enums import UserRole
from app.models.user.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.email == email.lower()))

    def email_exists(self, email: str) -> bool:
        return self.db.scalar(select(User.id).where(User.email == email.lower())) is not None

    def get_for_update(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id).with_for_update(of=User)
        return self.db.scalars(stmt).unique().one_or_none()

    def search(
        self,
        page: int,
        limit: int,
        role: Optional[UserRole] = None,
        domain_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Tuple[Sequence[User], int]:
        """
        Page through users, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            role: Only users with this role
            domain_id: Only users attached to this domain
            search: Case-insensitive substring of name, email or student number
        """
        stmt = select(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
        if domain_id is not None:
            stmt = stmt.where(User.domain_id == domain_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    User.name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.student_number.ilike(pattern),
                )
            )

        stmt = stmt.order_by(User.created_at.desc(), User.id.desc())
        return self.paginate(stmt, page, limit)

    def role_counts(self) -> Dict[str, int]:
        stmt = select(
            func.count(User.id).label("total"),
            func.count(case((User.role == UserRole.STUDENT, 1))).label("students"),
            func.count(case((User.role == UserRole.SUB_ADMIN, 1))).label("sub_admins"),
            func.count(case((User.role == UserRole.SUPER_ADMIN, 1))).label("super_admins"),
            func.count(case((User.is_active.is_(False), 1))).label("inactive"),
        )
        row = self.db.execute(stmt).one()
        return dict(row._mapping)
