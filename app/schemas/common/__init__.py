"""Shared schema building blocks."""

from app.schemas.common.base import BaseSchema
from app.schemas.common.response import (
    HealthResponse,
    MessageResponse,
    PaginationMeta,
)

__all__ = [
    "BaseSchema",
    "HealthResponse",
    "MessageResponse",
    "PaginationMeta",
]
