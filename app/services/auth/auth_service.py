# app/services/auth/auth_service.py
from __future__ import annotations

from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError
from app.core.logging import get_event_logger, user_id as user_id_var
from app.core.security import JWTManager, PasswordHasher
from app.models.base.enums import AuditAction, ResourceType
from app.models.user.user import User
from app.repositories.user import UserRepository
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.schemas.user import UserResponse
from app.services.audit import AuditLogService
from app.services.base import BaseService
from app.services.common.permissions import Actor, actor_from_user
from app.services.users.user_service import UserService

events = get_event_logger(__name__)


class AuthService(BaseService):
    """
    Authentication service:

    - Self-registration of students and sub-admins
    - Email/password login
    - Per-request bearer token verification
    """

    def __init__(
        self,
        db_session: Session,
        jwt_manager: JWTManager,
        password_hasher: Optional[PasswordHasher] = None,
    ) -> None:
        super().__init__(db_session)
        self.jwt = jwt_manager
        self.password_hasher = password_hasher or PasswordHasher()
        self.users = UserRepository(db_session)
        self.audit = AuditLogService(db_session)
        self.accounts = UserService(db_session, password_hasher=self.password_hasher)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Create an account and sign it in.

        Raises:
        - ConflictError if the email is taken
        - InvalidDomainError if the domain does not exist
        """
        user = self.accounts.create_account(data, AuditAction.REGISTER)
        events.info("register_succeeded", user_id=user.id, role=user.role.value)

        return AuthResponse(
            message="User registered successfully",
            user=UserResponse.model_validate(user),
            token=self.jwt.create_access_token(user.id),
        )

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #
    def login(
        self,
        data: LoginRequest,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResponse:
        """
        Email/password login.

        Raises:
        - AuthenticationError on unknown email or wrong password
          (same message for both) and on disabled accounts
        """
        user = self.users.get_by_email(data.email)

        if user is None or not self.password_hasher.verify(data.password, user.password_hash):
            events.warning("login_failed", reason="invalid_credentials", ip_address=ip_address)
            raise AuthenticationError("Invalid credentials")

        if not user.is_active:
            events.warning("login_failed", reason="account_disabled", user_id=user.id)
            raise AuthenticationError("Account is disabled")

        with self.transaction():
            self.audit.record(
                user.id,
                AuditAction.LOGIN,
                ResourceType.USER,
                user.id,
                ip_address=ip_address,
                user_agent=user_agent,
            )

        events.info("login_succeeded", user_id=user.id)
        return AuthResponse(
            message="Login successful",
            user=UserResponse.model_validate(user),
            token=self.jwt.create_access_token(user.id),
        )

    # ------------------------------------------------------------------ #
    # Token verification
    # ------------------------------------------------------------------ #
    def authenticate(self, token: str) -> Tuple[User, Actor]:
        """
        Resolve a bearer token to its user and actor.

        Raises:
        - TokenExpiredError / InvalidTokenError for bad tokens
        - AuthenticationError if the user is missing or disabled
        """
        uid = self.jwt.get_user_id(token)
        user = self.users.get_by_id(uid)
        if user is None or not user.is_active:
            events.warning("auth_rejected", reason="inactive_or_missing_user", user_id=uid)
            raise AuthenticationError("Invalid or inactive user")

        user_id_var.set(str(user.id))
        return user, actor_from_user(user)
