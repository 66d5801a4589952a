"""
Financial aggregates.

In-memory reductions over transaction and invoice records: monthly
revenue/expense/profit with month-over-month growth, and invoice totals.
Records are duck-typed (ORM rows or any object with the same attributes).

Dependencies: backend.core.dates, backend.core.formatters
System role: Statistics for the financial tab, invoices tab and dashboard
"""

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Sequence

from backend.core.dates import previous_month, to_local
from backend.core.enums import InvoiceStatus, TransactionType
from backend.core.formatters import format_currency


@dataclass(frozen=True)
class MonthlyStats:
    """Cash-book totals for one calendar month."""

    year: int
    month: int
    revenue: float
    expenses: float
    profit: float
    revenue_growth: float
    transaction_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InvoiceStats:
    """Counts and amounts over a set of invoices."""

    total: int
    paid: int
    pending: int
    overdue: int
    total_amount: float
    paid_amount: float
    pending_amount: float

    @property
    def formatted_total_amount(self) -> str:
        return format_currency(self.total_amount)

    @property
    def formatted_paid_amount(self) -> str:
        return format_currency(self.paid_amount)

    @property
    def formatted_pending_amount(self) -> str:
        return format_currency(self.pending_amount)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.update(
            formatted_total_amount=self.formatted_total_amount,
            formatted_paid_amount=self.formatted_paid_amount,
            formatted_pending_amount=self.formatted_pending_amount,
        )
        return data


def filter_by_type(transactions: Iterable[Any], type_: TransactionType | str) -> list[Any]:
    wanted = TransactionType(type_)
    return [t for t in transactions if TransactionType(t.type) is wanted]


def filter_by_month(
    transactions: Iterable[Any],
    year: int,
    month: int,
    tz_name: str,
) -> list[Any]:
    """
    Transactions created in the given calendar month (1-12), in academy time.
    """
    result = []
    for t in transactions:
        local = to_local(t.created_at, tz_name)
        if local.year == year and local.month == month:
            result.append(t)
    return result


def _sum_amounts(transactions: Iterable[Any], type_: TransactionType) -> float:
    return round(sum(float(t.amount) for t in transactions if TransactionType(t.type) is type_), 2)


def monthly_stats(
    transactions: Sequence[Any],
    year: int,
    month: int,
    tz_name: str,
) -> MonthlyStats:
    """
    Aggregate revenue, expenses and profit for a month.

    Growth compares revenue with the previous calendar month and is 0 when
    that month had no revenue.

    Args:
        transactions: Candidate transactions (any period)
        year: Target year
        month: Target month, 1-12
        tz_name: Academy timezone used to bucket created_at

    Returns:
        MonthlyStats: Totals for the month
    """
    current = filter_by_month(transactions, year, month, tz_name)
    revenue = _sum_amounts(current, TransactionType.REVENUE)
    expenses = _sum_amounts(current, TransactionType.EXPENSE)

    prev_year, prev_month = previous_month(year, month)
    last_revenue = _sum_amounts(
        filter_by_month(transactions, prev_year, prev_month, tz_name),
        TransactionType.REVENUE,
    )
    growth = ((revenue - last_revenue) / last_revenue) * 100 if last_revenue > 0 else 0.0

    return MonthlyStats(
        year=year,
        month=month,
        revenue=revenue,
        expenses=expenses,
        profit=round(revenue - expenses, 2),
        revenue_growth=round(growth, 2),
        transaction_count=len(current),
    )


def invoice_stats(invoices: Sequence[Any]) -> InvoiceStats:
    """
    Count invoices per status and sum their amounts.

    `pending_amount` covers every invoice that is not paid (pending and overdue).
    """
    statuses = [InvoiceStatus(inv.status) for inv in invoices]
    amounts = [float(inv.amount) for inv in invoices]
    paired = list(zip(statuses, amounts))

    return InvoiceStats(
        total=len(invoices),
        paid=statuses.count(InvoiceStatus.PAID),
        pending=statuses.count(InvoiceStatus.PENDING),
        overdue=statuses.count(InvoiceStatus.OVERDUE),
        total_amount=round(sum(amounts), 2),
        paid_amount=round(sum(a for s, a in paired if s is InvoiceStatus.PAID), 2),
        pending_amount=round(sum(a for s, a in paired if s is not InvoiceStatus.PAID), 2),
    )
