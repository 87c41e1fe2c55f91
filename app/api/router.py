"""
API Router - Main Entry Point

Aggregates all endpoints mounted under the API prefix.
"""
from fastapi import APIRouter

from app.api.routes import admin, auth, complaints, health, users

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        429: {"description": "Too Many Requests"},
        500: {"description": "Internal Server Error"},
        503: {"description": "Service Unavailable"},
    }
)

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(complaints.router)
router.include_router(admin.router)

root_router = health.root_router

__all__ = ["router", "root_router"]
