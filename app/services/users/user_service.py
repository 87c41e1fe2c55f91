"""
User self-service and account creation.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ErrorCode, InvalidDomainError, UserNotFoundError
from app.core.security import PasswordHasher
from app.models.base.enums import AuditAction, ResourceType
from app.models.user.user import User
from app.repositories.complaint import ComplaintRepository
from app.repositories.domain import DomainRepository
from app.repositories.user import UserRepository
from app.schemas.auth import UserCreateRequest
from app.schemas.user import ComplaintStats, DomainListResponse, DomainResponse, UserResponse
from app.services.audit import AuditLogService
from app.services.base import BaseService
from app.services.common.permissions import Actor
from app.services.complaint.complaint_policy import ComplaintPolicy


class UserService(BaseService):
    """
    Account creation shared by self-registration and the admin console,
    plus the endpoints a signed-in user calls about themselves.
    """

    def __init__(
        self,
        db_session: Session,
        password_hasher: Optional[PasswordHasher] = None,
        policy: Optional[ComplaintPolicy] = None,
    ):
        super().__init__(db_session)
        self.password_hasher = password_hasher or PasswordHasher()
        self.policy = policy or ComplaintPolicy()
        self.users = UserRepository(db_session)
        self.domains = DomainRepository(db_session)
        self.complaints = ComplaintRepository(db_session)
        self.audit = AuditLogService(db_session)

    # -------------------------------------------------------------------------
    # Account creation
    # -------------------------------------------------------------------------

    def create_account(
        self,
        request: UserCreateRequest,
        action: AuditAction,
        created_by: Optional[int] = None,
    ) -> User:
        """
        Create a user and its audit entry in one transaction.

        Args:
            request: Validated account details
            action: REGISTER for self-service, CREATE_USER for the admin console
            created_by: Acting admin; None means the new user audits itself

        Raises:
            ConflictError: If the email is already registered
            InvalidDomainError: If the domain does not exist
        """
        email = request.email.lower()

        try:
            with self.transaction():
                if self.users.email_exists(email):
                    raise ConflictError(
                        "User already exists",
                        ErrorCode.DUPLICATE_ENTRY,
                        {"email": email},
                    )

                domain = None
                if request.domain_id is not None:
                    domain = self.domains.get_by_id(request.domain_id)
                    if domain is None:
                        raise InvalidDomainError(request.domain_id)

                user = self.users.add(
                    User(
                        email=email,
                        password_hash=self.password_hasher.hash(request.password),
                        role=request.role,
                        name=request.name,
                        student_number=request.student_number,
                        domain=domain,
                        domain_id=domain.id if domain is not None else None,
                        is_active=True,
                    )
                )
                self.audit.record(
                    created_by if created_by is not None else user.id,
                    action,
                    ResourceType.USER,
                    user.id,
                    new_values={"email": email, "role": request.role.value, "name": request.name},
                )
        except IntegrityError as e:
            # A concurrent registration claimed the email after the check above
            raise ConflictError(
                "User already exists",
                ErrorCode.DUPLICATE_ENTRY,
                {"email": email},
            ) from e

        self._logger.info(
            "User account created",
            extra={"new_user_id": user.id, "role": request.role.value, "action": action.value},
        )
        return user

    # -------------------------------------------------------------------------
    # Self-service
    # -------------------------------------------------------------------------

    def list_domains(self) -> DomainListResponse:
        return DomainListResponse(
            domains=[DomainResponse.model_validate(d) for d in self.domains.list_ordered()]
        )

    def profile(self, actor: Actor) -> UserResponse:
        user = self.users.get_by_id(actor.user_id)
        if user is None:
            raise UserNotFoundError(actor.user_id)
        return UserResponse.model_validate(user)

    def stats(self, actor: Actor) -> ComplaintStats:
        """Complaint counts by status, scoped like the complaint listing."""
        return ComplaintStats.model_validate(
            self.complaints.status_counts(self.policy.scope(actor))
        )


__all__ = ["UserService"]
