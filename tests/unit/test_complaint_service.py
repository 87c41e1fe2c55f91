"""
Unit tests for the complaint lifecycle service against a real session.
"""
import pytest
from sqlalchemy import func, select

from app.core.exceptions import (
    ComplaintNotFoundError,
    InvalidDomainError,
    PermissionError,
    SameDomainTransferError,
)
from app.models.audit import AuditLog
from app.models.base.enums import AuditAction, ComplaintPriority, ComplaintStatus
from app.models.complaint import Complaint, ComplaintTransfer
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintFilters,
    ComplaintStatusUpdate,
    ComplaintTransferRequest,
)
from app.services.common.permissions import actor_from_user
from app.services.complaint import ComplaintService
from tests.conftest import HOSTEL_DOMAIN_ID, IET_DOMAIN_ID


@pytest.fixture
def service(db_session) -> ComplaintService:
    return ComplaintService(db_session)


def audit_entries(db_session, action=None):
    stmt = select(AuditLog).order_by(AuditLog.id)
    if action is not None:
        stmt = stmt.where(AuditLog.action == action)
    return list(db_session.scalars(stmt).unique())


def count(db_session, model) -> int:
    return db_session.scalar(select(func.count()).select_from(model))


class TestCreate:

    def test_creates_pending_complaint_with_audit(self, service, db_session, student):
        complaint = service.create(
            actor_from_user(student),
            ComplaintCreate(
                title="Leaking tap in block A",
                description="Tap has been leaking for a week",
                domain_id=HOSTEL_DOMAIN_ID,
            ),
        )

        assert complaint.id is not None
        assert complaint.status == ComplaintStatus.PENDING
        assert complaint.priority == ComplaintPriority.MEDIUM
        assert complaint.student_id == student.id
        assert complaint.admin_seen is False

        [entry] = audit_entries(db_session, AuditAction.CREATE)
        assert entry.user_id == student.id
        assert entry.resource_id == complaint.id
        assert entry.new_values == {
            "title": "Leaking tap in block A",
            "domainId": HOSTEL_DOMAIN_ID,
            "priority": "medium",
        }

    def test_unknown_domain_writes_nothing(self, service, db_session, student):
        with pytest.raises(InvalidDomainError):
            service.create(
                actor_from_user(student),
                ComplaintCreate(title="Valid title", description="Long enough description", domain_id=999),
            )

        assert count(db_session, Complaint) == 0
        assert count(db_session, AuditLog) == 0

    def test_admins_cannot_create(self, service, hostel_admin):
        with pytest.raises(PermissionError):
            service.create(
                actor_from_user(hostel_admin),
                ComplaintCreate(title="Valid title", description="Long enough description", domain_id=1),
            )


class TestUpdateStatus:

    def test_resolve_with_details_sets_resolved_at(self, service, db_session, student, hostel_admin, make_complaint):
        complaint = make_complaint(student)

        updated = service.update_status(
            actor_from_user(hostel_admin),
            complaint.id,
            ComplaintStatusUpdate(status=ComplaintStatus.RESOLVED, resolution_details="Plumber fixed it"),
        )

        assert updated.status == ComplaintStatus.RESOLVED
        assert updated.resolution_details == "Plumber fixed it"
        assert updated.resolved_at is not None

        [entry] = audit_entries(db_session, AuditAction.UPDATE)
        assert entry.old_values == {"status": "pending"}
        assert entry.new_values == {"status": "resolved", "resolutionDetails": "Plumber fixed it"}

    def test_resolve_without_details_leaves_resolved_at_unset(self, service, student, hostel_admin, make_complaint):
        complaint = make_complaint(student)

        updated = service.update_status(
            actor_from_user(hostel_admin),
            complaint.id,
            ComplaintStatusUpdate(status=ComplaintStatus.RESOLVED),
        )

        assert updated.status == ComplaintStatus.RESOLVED
        assert updated.resolved_at is None

    def test_later_transition_keeps_resolved_at(self, service, student, super_admin, make_complaint):
        complaint = make_complaint(student)
        actor = actor_from_user(super_admin)

        resolved = service.update_status(
            actor, complaint.id,
            ComplaintStatusUpdate(status=ComplaintStatus.RESOLVED, resolution_details="Done"),
        )
        resolved_at = resolved.resolved_at
        reopened = service.update_status(
            actor, complaint.id, ComplaintStatusUpdate(status=ComplaintStatus.PENDING)
        )

        assert reopened.status == ComplaintStatus.PENDING
        assert reopened.resolved_at == resolved_at

    def test_other_domain_is_not_found(self, service, db_session, student, iet_admin, make_complaint):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)

        with pytest.raises(ComplaintNotFoundError):
            service.update_status(
                actor_from_user(iet_admin),
                complaint.id,
                ComplaintStatusUpdate(status=ComplaintStatus.IN_PROGRESS),
            )
        assert count(db_session, AuditLog) == 0

    def test_student_rejected_before_lookup(self, service, student):
        with pytest.raises(PermissionError):
            service.update_status(
                actor_from_user(student), 12345, ComplaintStatusUpdate(status=ComplaintStatus.REJECTED)
            )


class TestMarkSeen:

    def test_sets_flag_and_time_on_every_call(self, service, db_session, student, hostel_admin, make_complaint):
        complaint = make_complaint(student)
        actor = actor_from_user(hostel_admin)

        first = service.mark_seen(actor, complaint.id)
        first_read_at = first.admin_read_at
        second = service.mark_seen(actor, complaint.id)

        assert second.admin_seen is True
        assert second.admin_read_at >= first_read_at
        entries = audit_entries(db_session, AuditAction.MARK_SEEN)
        assert len(entries) == 2
        assert entries[0].new_values == {"adminSeen": True}


class TestTransfer:

    def test_moves_domain_and_records_history(self, service, db_session, student, hostel_admin, make_complaint):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)
        actor = actor_from_user(hostel_admin)

        moved = service.transfer(
            actor,
            complaint.id,
            ComplaintTransferRequest(to_domain_id=IET_DOMAIN_ID, reason="Belongs to the lab"),
        )

        assert moved.domain_id == IET_DOMAIN_ID
        assert moved.domain_name == "IET"

        [record] = db_session.scalars(select(ComplaintTransfer)).unique().all()
        assert record.from_domain_id == HOSTEL_DOMAIN_ID
        assert record.to_domain_id == IET_DOMAIN_ID
        assert record.transferred_by == hostel_admin.id

        [entry] = audit_entries(db_session, AuditAction.TRANSFER)
        assert entry.old_values == {"domainId": HOSTEL_DOMAIN_ID}
        assert entry.new_values == {"domainId": IET_DOMAIN_ID, "transferReason": "Belongs to the lab"}

        # The complaint left the sub-admin's domain
        with pytest.raises(ComplaintNotFoundError):
            service.get(actor, complaint.id)

    def test_same_domain_writes_nothing(self, service, db_session, student, hostel_admin, make_complaint):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)

        with pytest.raises(SameDomainTransferError):
            service.transfer(
                actor_from_user(hostel_admin),
                complaint.id,
                ComplaintTransferRequest(to_domain_id=HOSTEL_DOMAIN_ID, reason="No reason"),
            )

        assert count(db_session, ComplaintTransfer) == 0
        assert count(db_session, AuditLog) == 0

    def test_unknown_target_domain(self, service, student, super_admin, make_complaint):
        complaint = make_complaint(student)
        with pytest.raises(InvalidDomainError):
            service.transfer(
                actor_from_user(super_admin),
                complaint.id,
                ComplaintTransferRequest(to_domain_id=999, reason="Somewhere else"),
            )

    def test_sub_admin_cannot_transfer_other_domain(self, service, student, iet_admin, make_complaint):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)
        with pytest.raises(ComplaintNotFoundError):
            service.transfer(
                actor_from_user(iet_admin),
                complaint.id,
                ComplaintTransferRequest(to_domain_id=3, reason="Not mine either"),
            )

    def test_history_oldest_first(self, service, student, super_admin, make_complaint):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)
        actor = actor_from_user(super_admin)
        service.transfer(actor, complaint.id, ComplaintTransferRequest(to_domain_id=2, reason="First move"))
        service.transfer(actor, complaint.id, ComplaintTransferRequest(to_domain_id=3, reason="Second move"))

        history = service.transfer_history(actor, complaint.id)

        assert [(t.from_domain_id, t.to_domain_id) for t in history] == [(1, 2), (2, 3)]


class TestAuditAtomicity:
    """A failing audit write rolls back the change it describes."""

    @pytest.fixture
    def failing_audit(self, service, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr(service.audit, "record", fail)

    def test_status_update_rolled_back(self, service, db_session, student, hostel_admin, make_complaint, failing_audit):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)

        with pytest.raises(RuntimeError):
            service.update_status(
                actor_from_user(hostel_admin),
                complaint.id,
                ComplaintStatusUpdate(status=ComplaintStatus.RESOLVED, resolution_details="Fixed"),
            )

        db_session.expire_all()
        stored = db_session.get(Complaint, complaint.id)
        assert stored.status == ComplaintStatus.PENDING
        assert stored.resolution_details is None
        assert stored.resolved_at is None
        assert count(db_session, AuditLog) == 0

    def test_transfer_rolled_back(self, service, db_session, student, super_admin, make_complaint, failing_audit):
        complaint = make_complaint(student, HOSTEL_DOMAIN_ID)

        with pytest.raises(RuntimeError):
            service.transfer(
                actor_from_user(super_admin),
                complaint.id,
                ComplaintTransferRequest(to_domain_id=IET_DOMAIN_ID, reason="Belongs to the lab"),
            )

        db_session.expire_all()
        assert db_session.get(Complaint, complaint.id).domain_id == HOSTEL_DOMAIN_ID
        assert count(db_session, ComplaintTransfer) == 0
        assert count(db_session, AuditLog) == 0


class TestQueries:

    def test_list_is_scoped_and_filtered(self, service, student, other_student, hostel_admin, make_complaint):
        mine = make_complaint(student, HOSTEL_DOMAIN_ID, priority=ComplaintPriority.HIGH)
        make_complaint(student, IET_DOMAIN_ID)
        make_complaint(other_student, HOSTEL_DOMAIN_ID)

        student_ids = {c.id for c in service.list(actor_from_user(student))}
        admin_list = service.list(actor_from_user(hostel_admin))
        high = service.list(actor_from_user(student), ComplaintFilters(priority=ComplaintPriority.HIGH))

        assert len(student_ids) == 2
        assert {c.domain_id for c in admin_list} == {HOSTEL_DOMAIN_ID}
        assert len(admin_list) == 2
        assert [c.id for c in high] == [mine.id]

    def test_list_newest_first(self, service, student, make_complaint):
        ids = [make_complaint(student).id for _ in range(3)]
        listed = [c.id for c in service.list(actor_from_user(student))]
        assert sorted(listed, reverse=True) == listed
        assert set(listed) == set(ids)

    def test_student_cannot_get_others_complaint(self, service, student, other_student, make_complaint):
        complaint = make_complaint(other_student)
        with pytest.raises(ComplaintNotFoundError):
            service.get(actor_from_user(student), complaint.id)

    def test_public_listing_only_resolved(self, service, student, make_complaint):
        make_complaint(student)
        resolved = make_complaint(student, status=ComplaintStatus.RESOLVED, resolution_details="Fixed")

        assert [c.id for c in service.list_public()] == [resolved.id]

    def test_public_listing_is_capped(self, db_session, student, make_complaint):
        for _ in range(3):
            make_complaint(student, status=ComplaintStatus.RESOLVED)
        assert len(ComplaintService(db_session, public_limit=2).list_public()) == 2
