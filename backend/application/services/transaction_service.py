"""
Transaction service orchestrator.

Coordinates the cash book: recording, editing and removing entries, plus
month filters and monthly statistics.

Dependencies: backend.boundary.db.CRUD, backend.core
System role: Financial use case orchestration
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Callable
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.transaction_crud import transaction_crud
from backend.boundary.db.models.transaction_model import TransactionModel
from backend.configs import get_settings
from backend.configs.academy import AcademySettings
from backend.core.dashboard_signal import DashboardSignal, dashboard_signal
from backend.core.dates import academy_today, previous_month
from backend.core.enums import TransactionType
from backend.core.exceptions import (
    AcademyException,
    TransactionNotFoundError,
    ValidationError,
)
from backend.core.financial_stats import filter_by_month, monthly_stats
from backend.core.validators import validate_amount

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = ("payment_method", "student_id", "student_name", "notes")
UPDATABLE_FIELDS = {"type", "amount", "description", "category", *OPTIONAL_FIELDS}


def transaction_to_dict(transaction: TransactionModel) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "type": transaction.type,
        "amount": transaction.amount,
        "description": transaction.description,
        "category": transaction.category,
        "payment_method": transaction.payment_method,
        "student_id": transaction.student_id,
        "student_name": transaction.student_name,
        "notes": transaction.notes,
        "created_at": transaction.created_at,
        "updated_at": transaction.updated_at,
    }


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _as_uuid(value: Any) -> UUID:
    try:
        return value if isinstance(value, UUID) else UUID(str(value))
    except ValueError as e:
        raise ValidationError("Invalid student_id", field="student_id") from e


def _month_start(year: int, month: int, tz_name: str) -> datetime:
    """Local midnight of the first day of the month, as UTC."""
    return datetime(year, month, 1, tzinfo=ZoneInfo(tz_name)).astimezone(timezone.utc)


class TransactionService:
    """
    Transaction service orchestrator.

    Every mutation signals the dashboard to refresh.
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: AcademySettings | None = None,
        signal: DashboardSignal | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """
        Initialize transaction service.

        Args:
            db: Async SQLAlchemy session
            settings: Academy settings (loaded from environment when None)
            signal: Dashboard signal (process-wide signal when None)
            today: Returns the academy-local date; injectable for tests
        """
        self.db = db
        self.settings = settings or get_settings().academy
        self.signal = signal or dashboard_signal
        self._today = today or (lambda: academy_today(self.settings.timezone))

    async def list_transactions(
        self,
        type_: TransactionType | None = None,
        year: int | None = None,
        month: int | None = None,
    ) -> list[dict]:
        """
        List entries newest first, optionally filtered by type and month.

        Args:
            type_: revenue or expense
            year: Calendar year (requires month)
            month: Calendar month 1-12 (requires year)

        Returns:
            list[dict]: Transaction dicts
        """
        if (year is None) != (month is None):
            raise ValidationError("Year and month must be given together")

        if year is not None and month is not None:
            if not 1 <= month <= 12:
                raise ValidationError("Month must be between 1 and 12", field="month")
            transactions = await self._load_months(year, month, months_back=0)
            transactions = filter_by_month(transactions, year, month, self.settings.timezone)
            if type_ is not None:
                transactions = [t for t in transactions if TransactionType(t.type) is TransactionType(type_)]
        elif type_ is not None:
            transactions = await transaction_crud.find_by(self.db, type=TransactionType(type_))
        else:
            transactions = await transaction_crud.get_all(self.db)
        return [transaction_to_dict(t) for t in transactions]

    async def get_transactions_by_type(self, type_: TransactionType) -> list[dict]:
        return await self.list_transactions(type_=type_)

    async def get_transactions_by_month(self, year: int, month: int) -> list[dict]:
        return await self.list_transactions(year=year, month=month)

    async def get_transaction(self, transaction_id: UUID) -> dict:
        transaction = await transaction_crud.get_by_id(self.db, transaction_id)
        if not transaction:
            raise TransactionNotFoundError(transaction_id)
        return transaction_to_dict(transaction)

    async def add_transaction(self, data: dict[str, Any]) -> dict:
        """
        Record a cash-book entry.

        Args:
            data: type, amount, description, category and optional
                payment_method, student_id, student_name, notes

        Returns:
            dict: Created transaction

        Raises:
            ValidationError: Amount not positive or description missing
        """
        amount = data.get("amount")
        if not validate_amount(amount):
            raise ValidationError("Amount must be greater than zero", field="amount")

        description = _clean(data.get("description"))
        if not description:
            raise ValidationError("Description is required", field="description")

        values: dict[str, Any] = {
            "type": TransactionType(data.get("type") or TransactionType.REVENUE),
            "amount": float(amount),
            "description": description,
            "category": _clean(data.get("category")) or self.settings.default_transaction_category,
        }
        for field in OPTIONAL_FIELDS:
            value = _clean(data.get(field))
            if value is not None:
                values[field] = value
        if "student_id" in values:
            values["student_id"] = _as_uuid(values["student_id"])

        try:
            transaction = await transaction_crud.create(self.db, **values)
        except Exception as e:
            logger.error("Failed to record transaction", extra={"error": str(e)})
            raise

        logger.info(
            "Transaction recorded",
            extra={
                "transaction_id": str(transaction.id),
                "transaction_type": values["type"].value,
                "amount": values["amount"],
            },
        )
        self.signal.notify("transaction.created")
        return transaction_to_dict(transaction)

    async def update_transaction(self, transaction_id: UUID, updates: dict[str, Any]) -> dict:
        """
        Edit a cash-book entry. Blank strings are ignored.

        Raises:
            TransactionNotFoundError: If the entry does not exist
            ValidationError: Amount given but not positive
        """
        values: dict[str, Any] = {}
        for key, raw in updates.items():
            if key not in UPDATABLE_FIELDS:
                continue
            value = _clean(raw)
            if value is not None:
                values[key] = value

        if "student_id" in values:
            values["student_id"] = _as_uuid(values["student_id"])
        if "amount" in values:
            if not validate_amount(values["amount"]):
                raise ValidationError("Amount must be greater than zero", field="amount")
            values["amount"] = float(values["amount"])

        try:
            if not values:
                return await self.get_transaction(transaction_id)

            updated = await transaction_crud.update_by_id(self.db, transaction_id, **values)
            if not updated:
                raise TransactionNotFoundError(transaction_id)
        except AcademyException:
            raise
        except Exception as e:
            logger.error(
                "Failed to update transaction",
                extra={"error": str(e), "transaction_id": str(transaction_id)},
            )
            raise

        logger.info(
            "Transaction updated",
            extra={"transaction_id": str(transaction_id), "updates": sorted(values.keys())},
        )
        self.signal.notify("transaction.updated")
        return transaction_to_dict(updated)

    async def delete_transaction(self, transaction_id: UUID) -> bool:
        deleted = await transaction_crud.delete_by_id(self.db, transaction_id)
        if not deleted:
            raise TransactionNotFoundError(transaction_id)
        logger.info("Transaction deleted", extra={"transaction_id": str(transaction_id)})
        self.signal.notify("transaction.deleted")
        return True

    async def _load_months(self, year: int, month: int, months_back: int) -> list[TransactionModel]:
        """Entries from `months_back` months before (year, month) through its end."""
        start_year, start_month = year, month
        for _ in range(months_back):
            start_year, start_month = previous_month(start_year, start_month)
        end_year, end_month = (year + 1, 1) if month == 12 else (year, month + 1)

        tz_name = self.settings.timezone
        start = _month_start(start_year, start_month, tz_name)
        end = _month_start(end_year, end_month, tz_name)
        return list(await transaction_crud.get_in_range(self.db, start, end))

    async def get_monthly_stats(self, reference: date | None = None) -> dict:
        """
        Revenue, expenses, profit and revenue growth for a calendar month.

        Args:
            reference: Any day of the target month (academy today when None)

        Returns:
            dict: year, month, revenue, expenses, profit, revenue_growth, transaction_count
        """
        reference = reference or self._today()
        transactions = await self._load_months(reference.year, reference.month, months_back=1)
        stats = monthly_stats(
            transactions,
            reference.year,
            reference.month,
            self.settings.timezone,
        )
        return stats.to_dict()
