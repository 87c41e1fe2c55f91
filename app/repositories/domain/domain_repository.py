"""
Domain repository.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.complaint.complaint import Complaint
from app.models.domain.domain import Domain
from app.repositories.base import BaseRepository


class DomainRepository(BaseRepository[Domain]):

    def __init__(self, db: Session):
        super().__init__(Domain, db)

    def list_ordered(self) -> List[Domain]:
        return self.find_all(select(Domain).order_by(Domain.name))

    def get_by_name(self, name: str) -> Optional[Domain]:
        return self.db.scalar(select(Domain).where(Domain.name == name))

    def complaint_counts(self) -> List[dict]:
        """Complaint count per domain, busiest first, including empty domains."""
        complaint_count = func.count(Complaint.id).label("complaint_count")
        stmt = (
            select(Domain.id, Domain.name, complaint_count)
            .outerjoin(Complaint, Complaint.domain_id == Domain.id)
            .group_by(Domain.id, Domain.name)
            .order_by(complaint_count.desc(), Domain.name)
        )
        return [
            {"id": row.id, "name": row.name, "complaint_count": row.complaint_count}
            for row in self.db.execute(stmt)
        ]
