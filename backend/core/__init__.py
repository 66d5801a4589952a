"""
Core business logic module.

Pure domain functions (status derivation, monthly statistics, validation,
formatting, CSV export) and the exception hierarchy. Nothing here touches
the database or HTTP layers.
"""

from backend.core.exceptions import (
    AcademyException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvoiceNotFoundError,
    NotFoundError,
    StudentNotFoundError,
    TransactionNotFoundError,
    UserNotFoundError,
    ValidationError,
    VideoNotFoundError,
)

__all__ = [
    "AcademyException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "InvoiceNotFoundError",
    "NotFoundError",
    "StudentNotFoundError",
    "TransactionNotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "VideoNotFoundError",
]
