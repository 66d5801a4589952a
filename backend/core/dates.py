"""
Calendar helpers.

Academy-local "now"/"today", Brazilian date parsing, month arithmetic and
Portuguese month names used in invoice descriptions.

Dependencies: zoneinfo (stdlib)
System role: Date handling shared by invoices, transactions and attendance
"""

import calendar
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

MONTH_NAMES: dict[str, str] = {
    "01": "Janeiro",
    "02": "Fevereiro",
    "03": "Março",
    "04": "Abril",
    "05": "Maio",
    "06": "Junho",
    "07": "Julho",
    "08": "Agosto",
    "09": "Setembro",
    "10": "Outubro",
    "11": "Novembro",
    "12": "Dezembro",
}


def normalize_month(month: int | str) -> str:
    """
    Normalize a month to its two-digit form ("1" / 1 / "01" -> "01").

    Raises:
        ValueError: If the month is not within 1..12
    """
    value = int(month)
    if not 1 <= value <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month!r}")
    return f"{value:02d}"


def month_name(month: int | str) -> str:
    """Portuguese month name for 1..12 (int or zero-padded string)."""
    return MONTH_NAMES[normalize_month(month)]


def academy_now(tz_name: str) -> datetime:
    """Current timezone-aware datetime in the academy timezone."""
    return datetime.now(ZoneInfo(tz_name))


def academy_today(tz_name: str) -> date:
    """Current calendar date in the academy timezone."""
    return academy_now(tz_name).date()


def to_local(value: datetime, tz_name: str) -> datetime:
    """
    Convert a stored timestamp to academy-local time.

    Naive datetimes are treated as UTC (SQLite drops tzinfo on round trip).
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name))


def parse_br_date(value: str) -> date:
    """
    Parse a DD/MM/YYYY date string.

    Raises:
        ValueError: If the string is not a valid DD/MM/YYYY date
    """
    parts = value.strip().split("/")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid date {value!r}, expected DD/MM/YYYY")
    day, month, year = (int(p) for p in parts)
    return date(year, month, day)


def parse_date_input(value: date | str) -> date:
    """
    Accept a date, an ISO date string or a DD/MM/YYYY string.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "/" in text:
        return parse_br_date(text)
    return date.fromisoformat(text[:10])


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the last day of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def add_months(value: datetime, months: int) -> datetime:
    """
    Shift a datetime by whole calendar months, clamping the day.

    31 Jan + 1 month -> 28/29 Feb.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def next_payment_due(last_payment: datetime) -> datetime:
    """Next monthly fee due date: one calendar month after the last payment."""
    return add_months(last_payment, 1)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) of the calendar month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def calculate_age(birth_date: date, today: date) -> int:
    """Age in whole years on `today`."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
