"""
Complaint repository.

Every read takes a visibility predicate from the authorization policy and
folds it into the WHERE clause, so rows outside the caller's scope are
indistinguishable from missing rows.
"""

from typing import Dict, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.models.base.enums import ComplaintPriority, ComplaintStatus
from app.models.complaint.complaint import Complaint
from app.repositories.base import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):

    def __init__(self, db: Session):
        super().__init__(Complaint, db)

    def list_scoped(
        self,
        scope: ColumnElement[bool],
        status: Optional[ComplaintStatus] = None,
        priority: Optional[ComplaintPriority] = None,
    ) -> List[Complaint]:
        """Complaints visible under ``scope``, newest first."""
        stmt = select(Complaint).where(scope)
        if status is not None:
            stmt = stmt.where(Complaint.status == status)
        if priority is not None:
            stmt = stmt.where(Complaint.priority == priority)
        stmt = stmt.order_by(Complaint.created_at.desc(), Complaint.id.desc())
        return self.find_all(stmt)

    def get_scoped(
        self,
        complaint_id: int,
        scope: ColumnElement[bool],
        for_update: bool = False,
    ) -> Optional[Complaint]:
        """
        Fetch one complaint if it exists and is visible under ``scope``.

        Args:
            complaint_id: Complaint identifier
            scope: Visibility predicate
            for_update: Lock the complaint row until the transaction ends
        """
        stmt = select(Complaint).where(Complaint.id == complaint_id, scope)
        if for_update:
            stmt = stmt.with_for_update(of=Complaint)
        return self.db.scalars(stmt).unique().one_or_none()

    def list_resolved(self, limit: int) -> List[Complaint]:
        """Resolved complaints, most recently resolved first."""
        stmt = (
            select(Complaint)
            .where(Complaint.status == ComplaintStatus.RESOLVED)
            .order_by(Complaint.resolved_at.desc(), Complaint.id.desc())
            .limit(limit)
        )
        return self.find_all(stmt)

    def status_counts(self, scope: ColumnElement[bool]) -> Dict[str, int]:
        """Total plus per-status counts under ``scope``."""
        columns = [func.count(Complaint.id).label("total")]
        for status in ComplaintStatus:
            columns.append(
                func.count(case((Complaint.status == status, 1))).label(status.value)
            )
        row = self.db.execute(select(*columns).where(scope)).one()
        return {key: int(value or 0) for key, value in row._mapping.items()}
