"""User repositories package."""

from app.repositories.user.user_repository import UserRepository

__all__ = ["UserRepository"]
