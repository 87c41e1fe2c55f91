# --- File: app/schemas/common/response.py ---
"""
Standard API response wrappers.
"""

import math

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "MessageResponse",
    "PaginationMeta",
    "HealthResponse",
]


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str = Field(..., description="Response message")


class PaginationMeta(BaseSchema):
    """Page window returned next to paginated collections."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def create(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if limit else 0)


class HealthResponse(BaseSchema):
    """Liveness payload."""

    status: str = "OK"
    message: str
    version: str
