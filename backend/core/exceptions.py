"""
Exception hierarchy for the Academy Manager application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AcademyException(Exception):
    """Base exception for all Academy Manager application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return the human-readable message (details go to logs, not clients)."""
        return self.message


class ValidationError(AcademyException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class NotFoundError(AcademyException):
    """Raised when a record cannot be found."""

    resource = "Record"

    def __init__(self, record_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not found error.

        Args:
            record_id: ID of the missing record
            details: Additional context
        """
        details = details or {}
        details["id"] = str(record_id)
        self.record_id = record_id
        super().__init__(f"{self.resource} not found: {record_id}", details)


class StudentNotFoundError(NotFoundError):
    resource = "Student"


class InvoiceNotFoundError(NotFoundError):
    resource = "Invoice"


class TransactionNotFoundError(NotFoundError):
    resource = "Transaction"


class VideoNotFoundError(NotFoundError):
    resource = "Video"


class UserNotFoundError(NotFoundError):
    resource = "User"


class ConflictError(AcademyException):
    """Raised when a write collides with existing data (e.g. duplicate email)."""

    pass


class AuthenticationError(AcademyException):
    """Raised when credentials or tokens are missing, invalid or expired."""

    pass


class AuthorizationError(AcademyException):
    """Raised when an authenticated user lacks the required role."""

    pass
