"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    SUB_ADMIN = "sub_admin"
    SUPER_ADMIN = "super_admin"


class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle status. Any value may follow any other."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class ComplaintPriority(str, enum.Enum):
    """Complaint priority level."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AuditAction(str, enum.Enum):
    """Action tags written to the audit trail."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    MARK_SEEN = "MARK_SEEN"
    TRANSFER = "TRANSFER"
    REGISTER = "REGISTER"
    LOGIN = "LOGIN"
    CREATE_USER = "CREATE_USER"
    ENABLE_USER = "ENABLE_USER"
    DISABLE_USER = "DISABLE_USER"


class ResourceType(str, enum.Enum):
    """Resource kinds referenced by audit entries."""
    COMPLAINT = "complaint"
    USER = "user"
