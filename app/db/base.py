"""SQLAlchemy Base class with every model registered on its metadata."""
from app.models.base.base_model import Base

# Importing the models registers their tables with Base.metadata
from app.models import AuditLog, Complaint, ComplaintTransfer, Domain, User  # noqa: F401

__all__ = ["Base"]
