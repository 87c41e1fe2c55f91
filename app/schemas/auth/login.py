"""
Login request schema.
"""

from pydantic import EmailStr, Field

from app.schemas.common.base import BaseSchema

__all__ = ["LoginRequest"]


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)
