"""
Core complaint service: creation, status changes, acknowledgement,
transfers and listings.

Each mutation writes its change, any transfer record and exactly one audit
entry inside a single transaction. Role checks happen before any lookup;
lookups are always scoped to what the caller may see.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ComplaintNotFoundError,
    InvalidDomainError,
    SameDomainTransferError,
)
from app.models.base.base_model import utcnow
from app.models.base.enums import AuditAction, ComplaintStatus, ResourceType
from app.models.complaint import Complaint, ComplaintTransfer
from app.repositories.complaint import ComplaintRepository, ComplaintTransferRepository
from app.repositories.domain import DomainRepository
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintFilters,
    ComplaintStatusUpdate,
    ComplaintTransferRequest,
)
from app.services.audit import AuditLogService
from app.services.base import BaseService
from app.services.common.permissions import Actor
from app.services.complaint.complaint_policy import ComplaintAction, ComplaintPolicy

DEFAULT_PUBLIC_LIMIT = 50


class ComplaintService(BaseService):
    """
    High-level complaint operations service.

    Returns ORM entities; callers project them through ``ComplaintPolicy``
    before they leave the API.
    """

    def __init__(
        self,
        db_session: Session,
        policy: Optional[ComplaintPolicy] = None,
        public_limit: int = DEFAULT_PUBLIC_LIMIT,
    ):
        """
        Initialize complaint service.

        Args:
            db_session: Active database session
            policy: Authorization policy (a fresh one by default)
            public_limit: Maximum rows in the public resolved listing
        """
        super().__init__(db_session)
        self.policy = policy or ComplaintPolicy()
        self.public_limit = public_limit
        self.complaints = ComplaintRepository(db_session)
        self.transfers = ComplaintTransferRepository(db_session)
        self.domains = DomainRepository(db_session)
        self.audit = AuditLogService(db_session)

    # -------------------------------------------------------------------------
    # Create & Update Operations
    # -------------------------------------------------------------------------

    def create(self, actor: Actor, request: ComplaintCreate) -> Complaint:
        """
        File a new complaint on behalf of a student.

        Args:
            actor: Authenticated caller (must be a student)
            request: Validated complaint body

        Returns:
            The stored complaint, status pending

        Raises:
            PermissionError: If the caller is not a student
            InvalidDomainError: If the target domain does not exist
        """
        self.policy.ensure_can(actor, ComplaintAction.CREATE)

        with self.transaction():
            domain = self.domains.get_by_id(request.domain_id)
            if domain is None:
                raise InvalidDomainError(request.domain_id)

            complaint = self.complaints.add(
                Complaint(
                    title=request.title,
                    description=request.description,
                    domain=domain,
                    domain_id=domain.id,
                    student_id=actor.user_id,
                    status=ComplaintStatus.PENDING,
                    priority=request.priority,
                    admin_seen=False,
                )
            )
            self.audit.record(
                actor.user_id,
                AuditAction.CREATE,
                ResourceType.COMPLAINT,
                complaint.id,
                new_values={
                    "title": complaint.title,
                    "domainId": domain.id,
                    "priority": complaint.priority.value,
                },
            )

        # Loads the owning student for projections that show it
        self.db.refresh(complaint)
        self._logger.info(
            "Complaint created",
            extra={"complaint_id": complaint.id, "domain_id": domain.id, "student_id": actor.user_id},
        )
        return complaint

    def update_status(
        self,
        actor: Actor,
        complaint_id: int,
        request: ComplaintStatusUpdate,
    ) -> Complaint:
        """
        Move a complaint to a new status.

        Resolution details and the resolution time are recorded only when
        the new status is ``resolved`` and details were supplied; an earlier
        resolution time is never cleared.

        Raises:
            PermissionError: If the caller is a student
            ComplaintNotFoundError: If the complaint is absent or out of scope
        """
        self.policy.ensure_can(actor, ComplaintAction.UPDATE_STATUS)

        with self.transaction():
            complaint = self._get_visible(actor, complaint_id, for_update=True)
            old_status = complaint.status
            now = utcnow()

            complaint.status = request.status
            if request.status == ComplaintStatus.RESOLVED and request.resolution_details:
                complaint.resolution_details = request.resolution_details
                complaint.resolved_at = now
            complaint.updated_at = now

            self.audit.record(
                actor.user_id,
                AuditAction.UPDATE,
                ResourceType.COMPLAINT,
                complaint.id,
                old_values={"status": old_status.value},
                new_values={
                    "status": request.status.value,
                    "resolutionDetails": request.resolution_details,
                },
            )

        self._logger.info(
            "Complaint status updated",
            extra={
                "complaint_id": complaint.id,
                "old_status": old_status.value,
                "new_status": request.status.value,
            },
        )
        return complaint

    def mark_seen(self, actor: Actor, complaint_id: int) -> Complaint:
        """
        Record that an administrator has looked at a complaint.

        Every call refreshes the acknowledgement time.

        Raises:
            PermissionError: If the caller is a student
            ComplaintNotFoundError: If the complaint is absent or out of scope
        """
        self.policy.ensure_can(actor, ComplaintAction.MARK_SEEN)

        with self.transaction():
            complaint = self._get_visible(actor, complaint_id, for_update=True)
            now = utcnow()

            complaint.admin_seen = True
            complaint.admin_read_at = now
            complaint.updated_at = now

            self.audit.record(
                actor.user_id,
                AuditAction.MARK_SEEN,
                ResourceType.COMPLAINT,
                complaint.id,
                new_values={"adminSeen": True},
            )

        self._logger.info("Complaint marked as seen", extra={"complaint_id": complaint.id})
        return complaint

    def transfer(
        self,
        actor: Actor,
        complaint_id: int,
        request: ComplaintTransferRequest,
    ) -> Complaint:
        """
        Move a complaint to another domain and keep a transfer record.

        Sub-admins may only transfer complaints currently in their own
        domain; out-of-scope complaints are reported as missing.

        Raises:
            PermissionError: If the caller is a student
            ComplaintNotFoundError: If the complaint is absent or out of scope
            SameDomainTransferError: If the target is the current domain
            InvalidDomainError: If the target domain does not exist
        """
        self.policy.ensure_can(actor, ComplaintAction.TRANSFER)

        with self.transaction():
            complaint = self._get_visible(actor, complaint_id, for_update=True)
            from_domain_id = complaint.domain_id

            if request.to_domain_id == from_domain_id:
                raise SameDomainTransferError(from_domain_id)

            target = self.domains.get_by_id(request.to_domain_id)
            if target is None:
                raise InvalidDomainError(request.to_domain_id)

            complaint.domain = target
            complaint.domain_id = target.id
            complaint.updated_at = utcnow()

            self.transfers.add(
                ComplaintTransfer(
                    complaint_id=complaint.id,
                    from_domain_id=from_domain_id,
                    to_domain_id=target.id,
                    transferred_by=actor.user_id,
                    transfer_reason=request.reason,
                )
            )
            self.audit.record(
                actor.user_id,
                AuditAction.TRANSFER,
                ResourceType.COMPLAINT,
                complaint.id,
                old_values={"domainId": from_domain_id},
                new_values={"domainId": target.id, "transferReason": request.reason},
            )

        self._logger.info(
            "Complaint transferred",
            extra={
                "complaint_id": complaint.id,
                "from_domain_id": from_domain_id,
                "to_domain_id": target.id,
            },
        )
        return complaint

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def list(self, actor: Actor, filters: Optional[ComplaintFilters] = None) -> List[Complaint]:
        """Complaints visible to ``actor``, newest first."""
        self.policy.ensure_can(actor, ComplaintAction.LIST)
        filters = filters or ComplaintFilters()
        return self.complaints.list_scoped(
            self.policy.scope(actor),
            status=filters.status,
            priority=filters.priority,
        )

    def get(self, actor: Actor, complaint_id: int) -> Complaint:
        """
        Raises:
            ComplaintNotFoundError: If the complaint is absent or out of scope
        """
        self.policy.ensure_can(actor, ComplaintAction.VIEW)
        return self._get_visible(actor, complaint_id)

    def transfer_history(self, actor: Actor, complaint_id: int) -> List[ComplaintTransfer]:
        """Transfer records of a visible complaint, oldest first."""
        self.policy.ensure_can(actor, ComplaintAction.VIEW)
        complaint = self._get_visible(actor, complaint_id)
        return self.transfers.list_for_complaint(complaint.id)

    def list_public(self) -> List[Complaint]:
        """Recently resolved complaints for the unauthenticated showcase."""
        return self.complaints.list_resolved(self.public_limit)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_visible(self, actor: Actor, complaint_id: int, for_update: bool = False) -> Complaint:
        complaint = self.complaints.get_scoped(
            complaint_id, self.policy.scope(actor), for_update=for_update
        )
        if complaint is None:
            raise ComplaintNotFoundError(complaint_id)
        return complaint
