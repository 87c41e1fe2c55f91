"""
Test configuration and fixtures.

Every test gets a fresh in-memory SQLite database seeded with the default
domains and one user per role.
"""
from typing import Callable, Dict, Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.config.settings import Settings
from app.core.security import JWTManager, PasswordHasher
from app.db.init_db import seed_domains
from app.db.session import Database
from app.main import create_app
from app.models.base.enums import ComplaintPriority, ComplaintStatus, UserRole
from app.models.complaint import Complaint
from app.models.user.user import User

fake = Faker()

TEST_PASSWORD = "password123"
HOSTEL_DOMAIN_ID = 1
IET_DOMAIN_ID = 2


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        ENVIRONMENT="testing",
        JWT_SECRET_KEY="test-jwt-secret-key-for-testing",
        PASSWORD_BCRYPT_ROUNDS=4,
        AUTO_CREATE_SCHEMA=False,
        RATE_LIMIT_ENABLED=True,
        RATE_LIMIT_DEFAULT=10_000,
        RATE_LIMIT_AUTH=1_000,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
    )


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """In-memory database shared by every connection of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine)
    database.create_all()
    with database.session_scope() as session:
        seed_domains(session)
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_manager(settings: Settings) -> JWTManager:
    return JWTManager.from_settings(settings)


@pytest.fixture
def make_user(database: Database, password_hasher: PasswordHasher) -> Callable[..., User]:
    """Factory inserting a user directly, bypassing the API"""
    password_hash = password_hasher.hash(TEST_PASSWORD)

    def _make_user(role: UserRole = UserRole.STUDENT, domain_id=None, is_active=True, **kwargs) -> User:
        with database.session_scope() as session:
            user = User(
                email=kwargs.pop("email", fake.unique.email()).lower(),
                password_hash=password_hash,
                role=role,
                name=kwargs.pop("name", fake.name()),
                student_number=kwargs.pop(
                    "student_number",
                    fake.unique.bothify("STU#####") if role == UserRole.STUDENT else None,
                ),
                domain_id=domain_id,
                is_active=is_active,
            )
            session.add(user)
            session.flush()
            session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def student(make_user) -> User:
    return make_user(UserRole.STUDENT)


@pytest.fixture
def other_student(make_user) -> User:
    return make_user(UserRole.STUDENT)


@pytest.fixture
def hostel_admin(make_user) -> User:
    return make_user(UserRole.SUB_ADMIN, domain_id=HOSTEL_DOMAIN_ID)


@pytest.fixture
def iet_admin(make_user) -> User:
    return make_user(UserRole.SUB_ADMIN, domain_id=IET_DOMAIN_ID)


@pytest.fixture
def super_admin(make_user) -> User:
    return make_user(UserRole.SUPER_ADMIN)


@pytest.fixture
def make_complaint(database: Database) -> Callable[..., Complaint]:
    """Factory inserting a complaint directly, bypassing the API"""

    def _make_complaint(owner: User, domain_id: int = HOSTEL_DOMAIN_ID, **kwargs) -> Complaint:
        with database.session_scope() as session:
            complaint = Complaint(
                title=kwargs.pop("title", "Broken window in room 12"),
                description=kwargs.pop("description", "The window latch is broken and will not close"),
                domain_id=domain_id,
                student_id=owner.id,
                status=kwargs.pop("status", ComplaintStatus.PENDING),
                priority=kwargs.pop("priority", ComplaintPriority.MEDIUM),
                admin_seen=False,
                **kwargs,
            )
            session.add(complaint)
            session.flush()
            complaint_id = complaint.id
        with database.session_scope() as session:
            return session.get(Complaint, complaint_id)

    return _make_complaint


@pytest.fixture
def auth_headers(jwt_manager: JWTManager) -> Callable[[User], Dict[str, str]]:
    """Bearer headers for a user"""

    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {jwt_manager.create_access_token(user.id)}"}

    return _headers


@pytest.fixture
def app(settings: Settings, database: Database):
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client
