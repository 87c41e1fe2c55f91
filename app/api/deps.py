# app/api/deps.py
"""
FastAPI dependencies shared by the routers.

Long-lived collaborators (settings, JWT manager, password hasher, database)
live on ``app.state`` and are created once by the application factory;
services are built per request around the request's session.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.exceptions import AuthenticationError, ValidationError
from app.core.security import JWTManager, PasswordHasher
from app.db.session import get_db
from app.models.base import MAX_ID
from app.services.admin import AdminService
from app.services.auth import AuthService
from app.services.common.permissions import Actor
from app.services.complaint import ComplaintService
from app.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by /api/auth/login")


# --- Application singletons ----------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_jwt_manager(request: Request) -> JWTManager:
    return request.app.state.jwt_manager


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


# --- Service factories ---------------------------------------------------------

def get_auth_service(
    db: Session = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(db, jwt_manager, password_hasher)


def get_complaint_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ComplaintService:
    return ComplaintService(db, public_limit=settings.PUBLIC_COMPLAINTS_LIMIT)


def get_user_service(
    db: Session = Depends(get_db),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(db, password_hasher=password_hasher)


def get_admin_service(
    db: Session = Depends(get_db),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> AdminService:
    return AdminService(db, password_hasher=password_hasher)


# --- Authentication ------------------------------------------------------------

def get_current_actor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Actor:
    """
    Verify the bearer token and build the caller's actor.

    Raises 401 when the token is missing, invalid or expired, or when the
    user no longer exists or has been disabled.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")

    user, actor = auth_service.authenticate(credentials.credentials)
    request.state.user_id = user.id
    return actor


# --- Path parameters -----------------------------------------------------------

def valid_complaint_id(complaint_id: str) -> int:
    """Parse the complaint id path segment; only positive integers are valid."""
    try:
        value = int(complaint_id)
    except ValueError:
        raise ValidationError("Invalid complaint ID")
    if not 0 < value <= MAX_ID:
        raise ValidationError("Invalid complaint ID")
    return value
