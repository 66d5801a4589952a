"""
Invoice status derivation.

An unpaid invoice is overdue from its due date onwards: the due date counts
from local midnight, so on the due day itself it has already passed. Paid
invoices never change status here.

Dependencies: backend.core.enums
System role: Single source of truth for pending/overdue classification
"""

from datetime import date

from backend.core.enums import InvoiceStatus


def is_past_due(due_date: date, today: date) -> bool:
    """True when the due date is `today` or earlier."""
    return due_date <= today


def derive_status(status: InvoiceStatus | str, due_date: date, today: date) -> InvoiceStatus:
    """
    Compute the status an invoice should have on `today`.

    Args:
        status: Currently stored status
        due_date: Invoice due date
        today: Reference date in academy timezone

    Returns:
        InvoiceStatus: PAID unchanged, otherwise OVERDUE or PENDING by due date
    """
    status = InvoiceStatus(status)
    if status is InvoiceStatus.PAID:
        return status
    return unpaid_status(due_date, today)


def unpaid_status(due_date: date, today: date) -> InvoiceStatus:
    """Status of an invoice without a registered payment."""
    return InvoiceStatus.OVERDUE if is_past_due(due_date, today) else InvoiceStatus.PENDING
