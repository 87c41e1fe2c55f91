"""
Custom Exceptions for the Complaint Management Application

This module defines custom exception classes used throughout the application
for better error handling and debugging. Every exception carries the HTTP
status code it is reported with.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    OPERATION_FAILED = "OPERATION_FAILED"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Business logic errors
    INVALID_DOMAIN = "INVALID_DOMAIN"
    SAME_DOMAIN_TRANSFER = "SAME_DOMAIN_TRANSFER"

    # Throttling
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Input Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when request data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, 400)


class InvalidDomainError(BaseAppException):
    """Raised when a referenced domain does not exist"""

    def __init__(self, domain_id: Optional[int] = None, message: str = "Invalid domain"):
        details = {"domain_id": domain_id} if domain_id is not None else {}
        super().__init__(message, ErrorCode.INVALID_DOMAIN, details, 400)


class SameDomainTransferError(BaseAppException):
    """Raised when a complaint is transferred to the domain it already belongs to"""

    def __init__(self, domain_id: int):
        super().__init__(
            "Cannot transfer to the same domain",
            ErrorCode.SAME_DOMAIN_TRANSFER,
            {"domain_id": domain_id},
            400,
        )


class ConflictError(BaseAppException):
    """Raised when an operation conflicts with existing state"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.OPERATION_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 400)


# ========================================
# Resource Not Found Exceptions
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class ComplaintNotFoundError(ResourceNotFoundError):
    """
    Raised when a complaint is absent or outside the caller's scope.

    Both cases share this one error so that the response never reveals
    whether a complaint exists in another domain.
    """

    def __init__(self, complaint_id: Optional[int] = None):
        super().__init__("Complaint", complaint_id)


class UserNotFoundError(ResourceNotFoundError):
    """Exception raised when a user is not found"""

    def __init__(self, user_id: Optional[int] = None):
        super().__init__("User", user_id)


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 401)


class TokenError(AuthenticationError):
    """Exception raised for token-related authentication errors"""

    def __init__(
        self,
        message: str = "Invalid token",
        error_code: ErrorCode = ErrorCode.TOKEN_INVALID,
    ):
        super().__init__(message, error_code, {"token_type": "access_token"})


class TokenExpiredError(TokenError):
    """Exception raised when a token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class InvalidTokenError(TokenError):
    """Exception raised when token is invalid"""

    def __init__(self, message: str = "Invalid or expired token", reason: Optional[str] = None):
        super().__init__(message, ErrorCode.TOKEN_INVALID)
        if reason:
            self.details["reason"] = reason


class PermissionError(BaseAppException):
    """Exception raised when the caller's role does not allow an action"""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        required_roles: Optional[List[str]] = None,
        role: Optional[str] = None,
    ):
        details: Dict[str, Any] = {}
        if required_roles:
            details["required_roles"] = required_roles
        if role:
            details["role"] = role
        super().__init__(message, ErrorCode.INSUFFICIENT_PERMISSIONS, details, 403)


# ========================================
# Infrastructure Exceptions
# ========================================

class StorageUnavailableError(BaseAppException):
    """Raised when the backing database cannot be reached"""

    def __init__(self, message: str = "Database connection failed. Please try again later."):
        super().__init__(message, ErrorCode.CONNECTION_ERROR, None, 503)


class RateLimitExceeded(BaseAppException):
    """Exception raised when a client exceeds its request budget"""

    def __init__(
        self,
        message: str = "Too many requests, please try again later.",
        limit: Optional[int] = None,
        retry_after: Optional[int] = None,
    ):
        details = {"limit": limit, "retry_after": retry_after}
        super().__init__(message, ErrorCode.RATE_LIMIT_EXCEEDED, details, 429)
        self.retry_after = retry_after


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "InvalidDomainError",
    "SameDomainTransferError",
    "ConflictError",
    "ResourceNotFoundError",
    "ComplaintNotFoundError",
    "UserNotFoundError",
    "AuthenticationError",
    "TokenError",
    "TokenExpiredError",
    "InvalidTokenError",
    "PermissionError",
    "StorageUnavailableError",
    "RateLimitExceeded",
]
