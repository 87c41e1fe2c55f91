"""Security module for credential hashing and bearer tokens."""

from .password_hasher import PasswordHasher
from .jwt_handler import JWTManager

__all__ = [
    "PasswordHasher",
    "JWTManager",
]
