# app/core/middleware.py
"""
HTTP middlewares shared by every route: request correlation, an access log
with timings, security headers, and a last-resort handler for exceptions
that no exception handler claimed.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.error_handling import GlobalExceptionHandler
from app.core.logging import get_logger, request_id as request_id_var, user_id as user_id_var

logger = get_logger("app.access")

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Correlates logs and error bodies with one request.

    An ``X-Request-ID`` sent by a proxy is reused; otherwise a UUID is
    minted. The id is kept on ``request.state``, bound to the logging
    context and echoed back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = rid

        rid_token = request_id_var.set(rid)
        uid_token = user_id_var.set(None)
        try:
            response = await call_next(request)
        finally:
            user_id_var.reset(uid_token)
            request_id_var.reset(rid_token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    One log line per request with its duration, also returned in
    ``X-Process-Time``. Exceptions that escaped every handler become a 500
    error body here.
    """

    def __init__(self, app: ASGIApp, handler: GlobalExceptionHandler):
        super().__init__(app)
        self.handler = handler

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await self.handler.handle_unexpected_exception(request, exc)

        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        level = logger.info if response.status_code < 400 else logger.warning
        level(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request_id": get_request_id(request),
                "user_id": getattr(request.state, "user_id", None),
                "status_code": response.status_code,
                "duration_ms": round(elapsed * 1000, 2),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


def register_middlewares(
    app: FastAPI,
    handler: GlobalExceptionHandler,
    include_security: bool = True,
) -> None:
    """
    Attach the core middlewares.

    Starlette runs the most recently added middleware first, so requests
    pass through them as: request id, security headers, access log, then
    anything registered before this call.
    """
    app.add_middleware(AccessLogMiddleware, handler=handler)
    if include_security:
        app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "AccessLogMiddleware",
    "register_middlewares",
    "get_request_id",
]
