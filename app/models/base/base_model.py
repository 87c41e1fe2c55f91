"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract base model shared by every
table: an integer surrogate key plus a helper for enum-typed columns.
"""

import enum
from datetime import datetime, timezone
from typing import Type

from sqlalchemy import Enum, Integer
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Create declarative base
Base = declarative_base()

# Largest value an INTEGER key column holds on every supported backend
MAX_ID = 2**31 - 1


def utcnow() -> datetime:
    """Timezone-aware current time used for every timestamp column."""
    return datetime.now(timezone.utc)


def enum_type(enum_cls: Type[enum.Enum], name: str) -> Enum:
    """
    Enum column type storing the member *values* as VARCHAR with a CHECK.

    Non-native so the same schema works on PostgreSQL and SQLite.
    """
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


class BaseModel(Base):
    """
    Abstract base model with an integer primary key.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Primary key",
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
