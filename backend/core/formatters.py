"""
Display formatters for Brazilian locale (pt-BR).

Dependencies: decimal (stdlib)
System role: Currency and date rendering for stats, exports and descriptions
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal


def format_currency(value: float | Decimal) -> str:
    """
    Format an amount as Brazilian Real.

    >>> format_currency(1234.5)
    'R$ 1.234,50'
    """
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer, _, cents = f"{abs(amount):.2f}".partition(".")
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}R$ {grouped},{cents}"


def format_date(value: date | datetime) -> str:
    """DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y")


def format_datetime(value: datetime) -> str:
    """DD/MM/YYYY HH:MM:SS."""
    return value.strftime("%d/%m/%Y %H:%M:%S")


def format_plain_amount(value: float) -> str:
    """'R$ 150.00' form used in CSV exports (dot decimal, no grouping)."""
    return f"R$ {value:.2f}"
