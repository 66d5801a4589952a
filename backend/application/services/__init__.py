"""Service orchestrators."""

from .auth_service import AuthService
from .dashboard_service import DashboardService
from .invoice_service import InvoiceService
from .student_service import StudentService
from .transaction_service import TransactionService
from .video_service import VideoService

__all__ = [
    "AuthService",
    "DashboardService",
    "InvoiceService",
    "StudentService",
    "TransactionService",
    "VideoService",
]
