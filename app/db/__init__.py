"""Database package: engine handle, session dependency and bootstrap."""

from app.db.session import Database, get_db

__all__ = ["Database", "get_db"]
