"""
Exception handlers that turn application errors into JSON responses.

Every error body has the shape::

    {"error": {"code", "message", "details", "timestamp"}, "request_id"}
"""

import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError

from app.config.settings import Settings
from app.core.exceptions import BaseAppException, ErrorCode, StorageUnavailableError
from app.core.logging import get_logger

logger = get_logger(__name__)

STORAGE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)


def error_body(
    request: Request,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": int(time.time()),
        }
    }
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return body


class GlobalExceptionHandler:
    """Maps each family of exceptions onto a status code and error body"""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def handle_application_exception(
        self, request: Request, exception: BaseAppException
    ) -> JSONResponse:
        """Handle custom application exceptions"""
        logger.warning(
            f"Application exception: {exception.error_code.value} - {exception.message}",
            extra={
                "error_code": exception.error_code.value,
                "status_code": exception.status_code,
                "path": request.url.path,
                "method": request.method,
            }
        )

        headers = None
        retry_after = getattr(exception, "retry_after", None)
        if retry_after is not None:
            headers = {"Retry-After": str(retry_after)}

        return JSONResponse(
            status_code=exception.status_code,
            content=error_body(
                request, exception.error_code.value, exception.message, exception.details
            ),
            headers=headers,
        )

    async def handle_validation_error(
        self, request: Request, exception: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors raised by FastAPI"""
        field_errors = {}
        for error in exception.errors():
            # Drop the leading "body"/"query"/"path" segment
            loc = [str(part) for part in error.get("loc", ())]
            field_path = ".".join(loc[1:] if len(loc) > 1 else loc)
            field_errors[field_path] = {
                "message": error.get("msg"),
                "type": error.get("type"),
            }

        logger.warning(
            f"Validation error: {len(field_errors)} field(s) failed validation",
            extra={
                "fields": sorted(field_errors),
                "path": request.url.path,
                "method": request.method,
            }
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                request,
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                {"field_errors": field_errors, "error_count": len(field_errors)},
            ),
        )

    async def handle_storage_error(self, request: Request, exception: Exception) -> JSONResponse:
        """Handle database connectivity failures"""
        logger.error(
            f"Database unavailable: {type(exception).__name__}",
            extra={"path": request.url.path, "method": request.method},
            exc_info=exception,
        )
        return await self.handle_application_exception(request, StorageUnavailableError())

    async def handle_unexpected_exception(self, request: Request, exception: Exception) -> JSONResponse:
        """Handle unexpected exceptions"""
        if isinstance(exception, STORAGE_ERRORS):
            return await self.handle_storage_error(request, exception)

        logger.critical(
            f"Unexpected exception: {type(exception).__name__} - {exception}",
            extra={"path": request.url.path, "method": request.method},
            exc_info=exception,
        )

        if self.settings.is_production():
            message = "Internal server error"
        else:
            message = str(exception) or "Internal server error"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(request, ErrorCode.INTERNAL_ERROR.value, message),
        )


def register_exception_handlers(app: FastAPI, handler: GlobalExceptionHandler) -> None:
    """Attach the handlers to the application"""
    app.add_exception_handler(BaseAppException, handler.handle_application_exception)
    app.add_exception_handler(RequestValidationError, handler.handle_validation_error)
    for exc_class in STORAGE_ERRORS:
        app.add_exception_handler(exc_class, handler.handle_storage_error)


__all__ = [
    "GlobalExceptionHandler",
    "register_exception_handlers",
    "error_body",
]
