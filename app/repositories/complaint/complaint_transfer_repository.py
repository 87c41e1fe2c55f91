"""
Complaint transfer repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.complaint.complaint_transfer import ComplaintTransfer
from app.repositories.base import BaseRepository


class ComplaintTransferRepository(BaseRepository[ComplaintTransfer]):

    def __init__(self, db: Session):
        super().__init__(ComplaintTransfer, db)

    def list_for_complaint(self, complaint_id: int) -> List[ComplaintTransfer]:
        stmt = (
            select(ComplaintTransfer)
            .where(ComplaintTransfer.complaint_id == complaint_id)
            .order_by(ComplaintTransfer.created_at, ComplaintTransfer.id)
        )
        return self.find_all(stmt)
