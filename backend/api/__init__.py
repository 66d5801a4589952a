"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    auth_router,
    dashboard_router,
    health_router,
    invoices_router,
    students_router,
    transactions_router,
    videos_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(students_router)
api_router.include_router(transactions_router)
api_router.include_router(invoices_router)
api_router.include_router(videos_router)
api_router.include_router(dashboard_router)

__all__ = ["api_router"]
