"""
Unit tests for the complaint authorization policy.
"""
import pytest
from sqlalchemy import select

from app.core.exceptions import PermissionError
from app.models.base.enums import UserRole
from app.models.complaint import Complaint
from app.schemas.complaint import (
    AdminComplaintView,
    StudentComplaintView,
    SuperAdminComplaintView,
)
from app.services.common.permissions import (
    StudentActor,
    SubAdminActor,
    SuperAdminActor,
    actor_from_user,
    require_role,
)
from app.services.complaint.complaint_policy import ComplaintAction, ComplaintPolicy
from tests.conftest import HOSTEL_DOMAIN_ID, IET_DOMAIN_ID

policy = ComplaintPolicy()

STUDENT = StudentActor(user_id=1)
SUB_ADMIN = SubAdminActor(user_id=2, domain_id=HOSTEL_DOMAIN_ID)
SUPER_ADMIN = SuperAdminActor(user_id=3)


class TestPermittedOperations:

    @pytest.mark.parametrize("action", list(ComplaintAction))
    def test_super_admin_may_do_everything_but_create(self, action):
        assert policy.can(SUPER_ADMIN, action) is (action != ComplaintAction.CREATE)

    @pytest.mark.parametrize(
        "action",
        [ComplaintAction.UPDATE_STATUS, ComplaintAction.MARK_SEEN, ComplaintAction.TRANSFER],
    )
    def test_students_may_not_administer(self, action):
        with pytest.raises(PermissionError) as exc_info:
            policy.ensure_can(STUDENT, action)
        assert exc_info.value.status_code == 403
        assert exc_info.value.details["role"] == "student"

    def test_only_students_create(self):
        policy.ensure_can(STUDENT, ComplaintAction.CREATE)
        with pytest.raises(PermissionError, match="Only students can create complaints"):
            policy.ensure_can(SUB_ADMIN, ComplaintAction.CREATE)

    def test_everyone_may_list_and_view(self):
        for actor in (STUDENT, SUB_ADMIN, SUPER_ADMIN):
            assert policy.can(actor, ComplaintAction.LIST)
            assert policy.can(actor, ComplaintAction.VIEW)


class TestScope:

    def _visible_ids(self, db_session, actor):
        stmt = select(Complaint.id).where(policy.scope(actor)).order_by(Complaint.id)
        return list(db_session.scalars(stmt))

    def test_scope_per_role(self, db_session, student, other_student, make_complaint):
        own = make_complaint(student, HOSTEL_DOMAIN_ID)
        other = make_complaint(other_student, IET_DOMAIN_ID)

        assert self._visible_ids(db_session, StudentActor(student.id)) == [own.id]
        assert self._visible_ids(db_session, SubAdminActor(99, IET_DOMAIN_ID)) == [other.id]
        assert self._visible_ids(db_session, SuperAdminActor(99)) == [own.id, other.id]

    def test_sub_admin_without_domain_sees_nothing(self, db_session, student, make_complaint):
        make_complaint(student)
        assert self._visible_ids(db_session, SubAdminActor(99, None)) == []


class TestProjection:

    def test_views_by_role(self, student, make_complaint):
        complaint = make_complaint(student)

        student_view = policy.project(StudentActor(student.id), complaint)
        admin_view = policy.project(SUB_ADMIN, complaint)
        super_view = policy.project(SUPER_ADMIN, complaint)

        assert type(student_view) is StudentComplaintView
        assert type(admin_view) is AdminComplaintView
        assert admin_view.student_id == student.id
        assert type(super_view) is SuperAdminComplaintView
        assert super_view.student_email == student.email
        assert super_view.student_number == student.student_number

    def test_public_view_has_no_student_identity(self, student, make_complaint):
        complaint = make_complaint(student, resolution_details="Fixed")
        data = policy.project_public(complaint).model_dump(by_alias=True)

        assert set(data) == {"id", "title", "resolutionDetails", "resolvedAt", "domainName"}
        assert data["domainName"] == "Hostel"


class TestActors:

    def test_actor_from_user(self, student, hostel_admin, super_admin):
        assert actor_from_user(student) == StudentActor(student.id)
        assert actor_from_user(hostel_admin) == SubAdminActor(hostel_admin.id, HOSTEL_DOMAIN_ID)
        assert actor_from_user(super_admin) == SuperAdminActor(super_admin.id)

    def test_require_role(self):
        require_role(SUPER_ADMIN, [UserRole.SUPER_ADMIN])
        with pytest.raises(PermissionError, match="Super admin access required"):
            require_role(SUB_ADMIN, [UserRole.SUPER_ADMIN], error_message="Super admin access required")
