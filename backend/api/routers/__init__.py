"""API routers."""

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .invoices import router as invoices_router  # imports from invoices/ package
from .students import router as students_router  # imports from students/ package
from .transactions import router as transactions_router
from .videos import router as videos_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "health_router",
    "invoices_router",
    "students_router",
    "transactions_router",
    "videos_router",
]
