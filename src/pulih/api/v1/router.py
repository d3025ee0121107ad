"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from pulih.api.v1.endpoints.auth import router as auth_router
from pulih.api.v1.endpoints.health import router as health_router
from pulih.api.v1.endpoints.journal import router as journal_router
from pulih.api.v1.endpoints.users import router as users_router

api_router = APIRouter()

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["Auth"],
)

api_router.include_router(
    journal_router,
    prefix="/journal",
    tags=["Journal"],
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"],
)
