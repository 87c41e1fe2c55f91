"""Database session management."""
from contextlib import contextmanager
from typing import Generator, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    Owns the engine and session factory for one application instance.

    Built by the application factory and stored on ``app.state.database``
    so tests can substitute their own engine.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs = {
            "pool_pre_ping": True,
            "echo": settings.DB_ECHO,
        }
        if settings.is_sqlite():
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_POOL_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
            )

        return cls(create_engine(settings.DATABASE_URL, **engine_kwargs))

    def session(self) -> Session:
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        from app.db.base import Base

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        from app.db.base import Base

        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not configured on the application")

    db = database.session()
    try:
        yield db
    finally:
        db.close()
