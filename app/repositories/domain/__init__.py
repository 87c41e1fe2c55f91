"""Domain repositories package."""

from app.repositories.domain.domain_repository import DomainRepository

__all__ = ["DomainRepository"]
