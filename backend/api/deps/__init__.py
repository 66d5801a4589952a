"""API-specific dependencies."""

# Re-export common dependencies
from .auth import get_current_user, require_admin
from .dependencies import (
    get_auth_service,
    get_dashboard_service,
    get_dashboard_signal,
    get_invoice_service,
    get_settings_dependency,
    get_student_service,
    get_transaction_service,
    get_video_service,
)

__all__ = [
    "get_auth_service",
    "get_current_user",
    "get_dashboard_service",
    "get_dashboard_signal",
    "get_invoice_service",
    "get_settings_dependency",
    "get_student_service",
    "get_transaction_service",
    "get_video_service",
    "require_admin",
]
