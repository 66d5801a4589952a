"""
Invoice service orchestrator.

Coordinates billing: issuing and editing invoices, registering and
removing payments, bulk monthly generation and invoice statistics.
Unpaid invoices have their pending/overdue status brought in line with
their due date whenever invoices are listed.

Dependencies: backend.boundary.db.CRUD, backend.core
System role: Billing use case orchestration
"""

import logging
from datetime import date
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.invoice_crud import invoice_crud
from backend.boundary.db.CRUD.student_crud import student_crud
from backend.boundary.db.models.invoice_model import InvoiceModel
from backend.configs import get_settings
from backend.configs.academy import AcademySettings
from backend.core.dashboard_signal import DashboardSignal, dashboard_signal
from backend.core.dates import academy_today, clamp_day, month_name, normalize_month, parse_date_input
from backend.core.enums import InvoicePaymentMethod, InvoiceStatus, StudentStatus
from backend.core.exceptions import (
    AcademyException,
    InvoiceNotFoundError,
    ValidationError,
)
from backend.core.financial_stats import invoice_stats
from backend.core.invoice_status import derive_status, unpaid_status
from backend.core.validators import validate_amount
from backend.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
    "student_name",
    "month",
    "year",
    "amount",
    "due_date",
    "status",
    "description",
    "pix_key",
}


def invoice_to_dict(invoice: InvoiceModel) -> dict[str, Any]:
    return {
        "id": invoice.id,
        "student_id": invoice.student_id,
        "student_name": invoice.student_name,
        "month": invoice.month,
        "year": invoice.year,
        "amount": invoice.amount,
        "due_date": invoice.due_date,
        "status": invoice.status,
        "description": invoice.description,
        "pix_key": invoice.pix_key,
        "paid_at": invoice.paid_at,
        "payment_method": invoice.payment_method,
        "created_at": invoice.created_at,
        "updated_at": invoice.updated_at,
    }


def default_description(month: str, year: int) -> str:
    """'Mensalidade - Março/2025'."""
    return f"Mensalidade - {month_name(month)}/{year}"


class InvoiceService:
    """
    Invoice service orchestrator.

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
        Initialize invoice service.

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

    async def _get_model(self, invoice_id: UUID) -> InvoiceModel:
        invoice = await invoice_crud.get_by_id(self.db, invoice_id)
        if not invoice:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    async def refresh_overdue(self) -> int:
        """
        Persist the due-date status of unpaid invoices.

        Pending invoices due today or earlier become overdue; overdue invoices
        rescheduled to a later date return to pending.

        Returns:
            int: Number of invoices whose status changed
        """
        moved = await invoice_crud.sync_unpaid_statuses(self.db, self._today())
        if moved:
            logger.info("Unpaid invoice statuses refreshed", extra={"count": moved})
        return moved

    async def list_invoices(self, student_id: UUID | None = None) -> list[dict]:
        """
        List invoices, most recent billing period first.

        Args:
            student_id: Only this student's invoices

        Returns:
            list[dict]: Invoice dicts with up-to-date status
        """
        await self.refresh_overdue()
        if student_id is not None:
            invoices = await invoice_crud.get_for_student(self.db, student_id)
        else:
            invoices = await invoice_crud.get_all_ordered(self.db)
        return [invoice_to_dict(i) for i in invoices]

    async def get_invoice(self, invoice_id: UUID) -> dict:
        return invoice_to_dict(await self._get_model(invoice_id))

    async def add_invoice(self, data: dict[str, Any]) -> dict:
        """
        Issue an invoice.

        Billing month and year default to the due date's; the description
        defaults to "Mensalidade - <Month>/<year>".

        Args:
            data: student_id, amount, due_date (required) and optional
                student_name, month, year, description, pix_key

        Returns:
            dict: Created invoice (status pending)

        Raises:
            ValidationError: student_id, positive amount or due_date missing
        """
        student_id = data.get("student_id")
        amount = data.get("amount")
        raw_due = data.get("due_date")
        if not student_id or not validate_amount(amount) or not raw_due:
            raise ValidationError("Required invoice data missing")

        try:
            student_id = UUID(str(student_id))
            due_date = parse_date_input(raw_due)
            month = normalize_month(data.get("month") or due_date.month)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        year = int(data.get("year") or due_date.year)

        student_name = (data.get("student_name") or "").strip()
        if not student_name:
            student = await student_crud.get_by_id(self.db, student_id)
            student_name = student.name if student else ""

        invoice = await self._create(
            student_id=student_id,
            student_name=student_name,
            month=month,
            year=year,
            amount=float(amount),
            due_date=due_date,
            description=(data.get("description") or "").strip() or default_description(month, year),
            pix_key=(data.get("pix_key") or "").strip(),
        )
        self.signal.notify("invoice.created")
        return invoice_to_dict(invoice)

    async def _create(self, **values: Any) -> InvoiceModel:
        try:
            invoice = await invoice_crud.create(self.db, status=InvoiceStatus.PENDING, **values)
        except Exception as e:
            logger.error(
                "Failed to issue invoice",
                extra={"error": str(e), "student_id": str(values.get("student_id"))},
            )
            raise
        logger.info(
            "Invoice issued",
            extra={
                "invoice_id": str(invoice.id),
                "student_id": str(invoice.student_id),
                "period": f"{invoice.month}/{invoice.year}",
            },
        )
        return invoice

    async def update_invoice(self, invoice_id: UUID, updates: dict[str, Any]) -> dict:
        """
        Edit an invoice. None values are ignored.

        A non-paid status always follows the resulting due date, so a
        supplied pending/overdue is corrected when it contradicts it. Moving
        a paid invoice back to pending/overdue removes the payment.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
            ValidationError: Amount given but not positive, bad month/date,
                or status set to paid (use mark_as_paid)
        """
        invoice = await self._get_model(invoice_id)

        values = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and v is not None}
        try:
            if "amount" in values:
                if not validate_amount(values["amount"]):
                    raise ValidationError("Amount must be greater than zero", field="amount")
                values["amount"] = float(values["amount"])
            if "month" in values:
                values["month"] = normalize_month(values["month"])
            if "due_date" in values:
                values["due_date"] = parse_date_input(values["due_date"])
            if "status" in values:
                values["status"] = InvoiceStatus(values["status"])
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if not values:
            return await self.get_invoice(invoice_id)

        current = InvoiceStatus(invoice.status)
        requested = values.get("status", current)
        if requested is InvoiceStatus.PAID and current is not InvoiceStatus.PAID:
            raise ValidationError("Use the pay endpoint to register a payment", field="status")
        if requested is not InvoiceStatus.PAID:
            values["status"] = derive_status(requested, values.get("due_date", invoice.due_date), self._today())
            if current is InvoiceStatus.PAID:
                values["paid_at"] = None
                values["payment_method"] = None

        try:
            updated = await invoice_crud.update_by_id(self.db, invoice_id, **values)
            if not updated:
                raise InvoiceNotFoundError(invoice_id)
        except AcademyException:
            raise
        except Exception as e:
            logger.error(
                "Failed to update invoice",
                extra={"error": str(e), "invoice_id": str(invoice_id)},
            )
            raise

        logger.info(
            "Invoice updated",
            extra={"invoice_id": str(invoice_id), "updates": sorted(values.keys())},
        )
        self.signal.notify("invoice.updated")
        return invoice_to_dict(updated)

    async def mark_as_paid(
        self,
        invoice_id: UUID,
        payment_method: InvoicePaymentMethod,
    ) -> dict:
        """
        Register payment of an invoice (paid today with the given method).

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
        """
        await self._get_model(invoice_id)
        updated = await invoice_crud.update_by_id(
            self.db,
            invoice_id,
            status=InvoiceStatus.PAID,
            paid_at=self._today(),
            payment_method=InvoicePaymentMethod(payment_method),
        )
        logger.info(
            "Invoice marked as paid",
            extra={"invoice_id": str(invoice_id), "payment_method": InvoicePaymentMethod(payment_method).value},
        )
        self.signal.notify("invoice.paid")
        return invoice_to_dict(updated)

    async def mark_as_unpaid(self, invoice_id: UUID) -> dict:
        """
        Remove a registered payment.

        Status returns to overdue when the due date has passed, else pending.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
        """
        invoice = await self._get_model(invoice_id)
        status = unpaid_status(invoice.due_date, self._today())
        updated = await invoice_crud.update_by_id(
            self.db,
            invoice_id,
            status=status,
            paid_at=None,
            payment_method=None,
        )
        logger.info(
            "Invoice payment removed",
            extra={"invoice_id": str(invoice_id), "status": status.value},
        )
        self.signal.notify("invoice.unpaid")
        return invoice_to_dict(updated)

    async def delete_invoice(self, invoice_id: UUID) -> bool:
        deleted = await invoice_crud.delete_by_id(self.db, invoice_id)
        if not deleted:
            raise InvoiceNotFoundError(invoice_id)
        logger.info("Invoice deleted", extra={"invoice_id": str(invoice_id)})
        self.signal.notify("invoice.deleted")
        return True

    async def generate_monthly_invoices(
        self,
        month: int | str,
        year: int,
        due_day: int | None = None,
        pix_key: str | None = None,
    ) -> dict:
        """
        Issue one invoice per active student with a monthly fee.

        Students that already have an invoice for the period are skipped.

        Args:
            month: Billing month 1-12
            year: Billing year
            due_day: Day of month the invoices fall due (clamped to month length)
            pix_key: PIX key printed on every invoice

        Returns:
            dict: {"created": [invoice dicts], "skipped": int}

        Raises:
            ValidationError: Invalid month or due day
        """
        try:
            month = normalize_month(month)
        except ValueError as e:
            raise ValidationError(str(e), field="month") from e

        due_day = due_day or self.settings.default_invoice_due_day
        if not 1 <= due_day <= 31:
            raise ValidationError("Due day must be between 1 and 31", field="due_day")
        due_date = clamp_day(year, int(month), due_day)

        students = await student_crud.find_by(self.db, status=StudentStatus.ACTIVE)
        eligible = [s for s in students if (s.monthly_fee or 0) > 0]
        already_billed = {i.student_id for i in await invoice_crud.get_for_period(self.db, month, year)}

        created: list[InvoiceModel] = []
        skipped = 0
        for student in eligible:
            if student.id in already_billed:
                skipped += 1
                continue
            created.append(
                await self._create(
                    student_id=student.id,
                    student_name=student.name,
                    month=month,
                    year=year,
                    amount=float(student.monthly_fee),
                    due_date=due_date,
                    description=default_description(month, year),
                    pix_key=(pix_key or "").strip(),
                )
            )

        log_with_context(
            logger,
            logging.INFO,
            "Monthly invoices generated",
            period=f"{month}/{year}",
            created_count=len(created),
            skipped=skipped,
            eligible_students=[s.id for s in eligible],
        )
        self.signal.notify("invoice.generated")
        return {"created": [invoice_to_dict(i) for i in created], "skipped": skipped}

    async def get_stats(self, student_id: UUID | None = None) -> dict:
        """
        Invoice counts and amounts, with BRL-formatted totals.

        Args:
            student_id: Restrict to one student's invoices

        Returns:
            dict: total, paid, pending, overdue, amounts and formatted amounts
        """
        await self.refresh_overdue()
        if student_id is not None:
            invoices = await invoice_crud.get_for_student(self.db, student_id)
        else:
            invoices = await invoice_crud.get_all(self.db)
        return invoice_stats(invoices).to_dict()
