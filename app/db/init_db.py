# app/db/init_db.py
"""
Database initialization utilities.

Creates the tables, seeds the fixed set of domains and, when a password is
configured, the bootstrap super-admin account. Safe to run repeatedly.

Run directly with ``python -m app.db.init_db``.
"""
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config.settings import Settings, get_settings
from app.core.logging import get_logger, setup_logging
from app.core.security import PasswordHasher
from app.db.session import Database
from app.models.base.enums import UserRole
from app.models.domain.domain import DEFAULT_DOMAINS, Domain
from app.models.user.user import User

logger = get_logger(__name__)


def seed_domains(session: Session) -> int:
    """Insert any missing default domain; return how many were added."""
    existing = set(session.scalars(select(Domain.name)))
    added = 0
    for name, description in DEFAULT_DOMAINS:
        if name not in existing:
            session.add(Domain(name=name, description=description))
            added += 1
    return added


def seed_super_admin(session: Session, settings: Settings) -> bool:
    """Create the bootstrap super-admin unless it already exists."""
    if not settings.SUPER_ADMIN_PASSWORD:
        logger.info("SUPER_ADMIN_PASSWORD not set, skipping super admin seed")
        return False

    email = settings.SUPER_ADMIN_EMAIL.lower()
    if session.scalar(select(User.id).where(User.email == email)) is not None:
        return False

    hasher = PasswordHasher(settings.PASSWORD_BCRYPT_ROUNDS)
    session.add(
        User(
            email=email,
            password_hash=hasher.hash(settings.SUPER_ADMIN_PASSWORD),
            role=UserRole.SUPER_ADMIN,
            name=settings.SUPER_ADMIN_NAME,
        )
    )
    return True


def init_db(database: Database, settings: Settings) -> None:
    """
    Initialize the database by creating all tables and seeding reference data.

    Note: This is suitable for development/testing only.
    For production, manage the schema out of band.
    """
    try:
        database.create_all()
        with database.session_scope() as session:
            domains_added = seed_domains(session)
            admin_created = seed_super_admin(session, settings)
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise

    logger.info(
        "Database initialized",
        extra={"domains_added": domains_added, "super_admin_created": admin_created},
    )


if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings)
    database = Database.from_settings(settings)
    try:
        init_db(database, settings)
    finally:
        database.dispose()
