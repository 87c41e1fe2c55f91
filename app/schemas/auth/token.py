"""
Authentication response schema.
"""

from app.schemas.common.base import BaseSchema
from app.schemas.user.user_response import UserResponse

__all__ = ["AuthResponse"]


class AuthResponse(BaseSchema):
    message: str
    user: UserResponse
    token: str
