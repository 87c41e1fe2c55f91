"""Domain (department) models package."""

from app.models.domain.domain import Domain

__all__ = ["Domain"]
