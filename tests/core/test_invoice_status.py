"""
Test suite for invoice status derivation.

System role: Verification of pending/overdue classification
"""

from datetime import date

from backend.core.enums import InvoiceStatus
from backend.core.invoice_status import derive_status, is_past_due, unpaid_status

TODAY = date(2025, 3, 15)


class TestDeriveStatus:
    """Test suite for derive_status()."""

    def test_paid_never_changes(self) -> None:
        """Test a paid invoice stays paid even long after its due date."""
        assert derive_status(InvoiceStatus.PAID, date(2024, 1, 1), TODAY) is InvoiceStatus.PAID

    def test_pending_past_due_becomes_overdue(self) -> None:
        assert derive_status("pending", date(2025, 3, 14), TODAY) is InvoiceStatus.OVERDUE

    def test_due_today_is_overdue(self) -> None:
        """Test the due date has passed once its day starts."""
        assert derive_status(InvoiceStatus.PENDING, TODAY, TODAY) is InvoiceStatus.OVERDUE

    def test_due_tomorrow_is_pending(self) -> None:
        assert derive_status(InvoiceStatus.PENDING, date(2025, 3, 16), TODAY) is InvoiceStatus.PENDING

    def test_overdue_with_future_due_date_returns_to_pending(self) -> None:
        assert derive_status(InvoiceStatus.OVERDUE, date(2025, 4, 10), TODAY) is InvoiceStatus.PENDING


def test_is_past_due_includes_due_day() -> None:
    assert is_past_due(date(2025, 3, 14), TODAY)
    assert is_past_due(TODAY, TODAY)
    assert not is_past_due(date(2025, 3, 16), TODAY)


def test_unpaid_status_depends_on_due_date() -> None:
    assert unpaid_status(date(2025, 3, 1), TODAY) is InvoiceStatus.OVERDUE
    assert unpaid_status(date(2025, 3, 20), TODAY) is InvoiceStatus.PENDING
