"""
Test suite for InvoiceService.

Tests issuing with defaults, pending/overdue persistence, payment
registration and removal, edits that touch status or due date, monthly generation and statistics, with academy "today" fixed to
15/03/2025.

System role: Verification of billing use case orchestration
"""

import uuid
from datetime import date

import pytest

from backend.application.services.invoice_service import InvoiceService, default_description
from backend.boundary.db.CRUD.invoice_crud import invoice_crud
from backend.boundary.db.CRUD.student_crud import student_crud
from backend.core.enums import BeltLevel, InvoicePaymentMethod, InvoiceStatus, StudentStatus
from backend.core.exceptions import InvoiceNotFoundError, ValidationError


@pytest.fixture
def service(test_async_db, academy_settings, signal, today) -> InvoiceService:
    return InvoiceService(test_async_db, settings=academy_settings, signal=signal, today=lambda: today)


async def _student(session, name: str, email: str, monthly_fee: float = 150.0, status=StudentStatus.ACTIVE):
    return await student_crud.create(
        session,
        name=name,
        email=email,
        belt=BeltLevel.BRANCA,
        status=status,
        monthly_fee=monthly_fee,
    )


async def _issue(service: InvoiceService, student_id, due_date="2025-03-20", **overrides) -> dict:
    data = {"student_id": student_id, "student_name": "Ana", "amount": 150, "due_date": due_date}
    data.update(overrides)
    return await service.add_invoice(data)


def test_default_description() -> None:
    assert default_description("03", 2025) == "Mensalidade - Março/2025"


class TestAddInvoice:
    """Test suite for InvoiceService.add_invoice()."""

    @pytest.mark.asyncio
    async def test_defaults_from_due_date(self, service: InvoiceService, signal) -> None:
        # Act
        invoice = await _issue(service, uuid.uuid4(), due_date="10/04/2025")

        # Assert
        assert invoice["status"] is InvoiceStatus.PENDING
        assert invoice["due_date"] == date(2025, 4, 10)
        assert invoice["month"] == "04"
        assert invoice["year"] == 2025
        assert invoice["description"] == "Mensalidade - Abril/2025"
        assert invoice["paid_at"] is None
        assert invoice["payment_method"] is None
        assert signal.snapshot().reason == "invoice.created"

    @pytest.mark.asyncio
    async def test_explicit_period_and_string_student_id(self, service: InvoiceService) -> None:
        student_id = uuid.uuid4()
        invoice = await _issue(service, str(student_id), month="3", year=2025, pix_key=" pix@academia.com ")

        assert invoice["student_id"] == student_id
        assert invoice["month"] == "03"
        assert invoice["pix_key"] == "pix@academia.com"

    @pytest.mark.asyncio
    async def test_student_name_looked_up_when_missing(self, service: InvoiceService, test_async_db) -> None:
        student = await _student(test_async_db, "Bruno Lima", "bruno@academia.com")

        invoice = await _issue(service, student.id, student_name="")

        assert invoice["student_name"] == "Bruno Lima"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            {"amount": 150, "due_date": "2025-03-20"},
            {"student_id": str(uuid.uuid4()), "due_date": "2025-03-20"},
            {"student_id": str(uuid.uuid4()), "amount": 0, "due_date": "2025-03-20"},
            {"student_id": str(uuid.uuid4()), "amount": float("nan"), "due_date": "2025-03-20"},
            {"student_id": str(uuid.uuid4()), "amount": float("inf"), "due_date": "2025-03-20"},
            {"student_id": str(uuid.uuid4()), "amount": 150},
        ],
    )
    async def test_required_data_missing(self, service: InvoiceService, data: dict) -> None:
        with pytest.raises(ValidationError, match="Required invoice data missing"):
            await service.add_invoice(data)

    @pytest.mark.asyncio
    async def test_unparseable_due_date(self, service: InvoiceService) -> None:
        with pytest.raises(ValidationError):
            await _issue(service, uuid.uuid4(), due_date="31/02/2025")


class TestOverdue:
    """Test suite for pending/overdue persistence on read."""

    @pytest.mark.asyncio
    async def test_listing_persists_overdue(self, service: InvoiceService) -> None:
        # Arrange
        student_id = uuid.uuid4()
        past = await _issue(service, student_id, due_date="2025-03-10")
        due_today = await _issue(service, student_id, due_date="2025-03-15")
        upcoming = await _issue(service, student_id, due_date="2025-03-16")

        # Act
        invoices = {i["id"]: i for i in await service.list_invoices()}

        # Assert
        assert invoices[past["id"]]["status"] is InvoiceStatus.OVERDUE
        assert invoices[due_today["id"]]["status"] is InvoiceStatus.OVERDUE
        assert invoices[upcoming["id"]]["status"] is InvoiceStatus.PENDING
        assert (await service.get_invoice(past["id"]))["status"] is InvoiceStatus.OVERDUE

    @pytest.mark.asyncio
    async def test_refresh_overdue_counts(self, service: InvoiceService) -> None:
        await _issue(service, uuid.uuid4(), due_date="2025-03-01")
        await _issue(service, uuid.uuid4(), due_date="2025-03-02")

        assert await service.refresh_overdue() == 2
        assert await service.refresh_overdue() == 0

    @pytest.mark.asyncio
    async def test_list_for_student(self, service: InvoiceService) -> None:
        student_id = uuid.uuid4()
        await _issue(service, student_id)
        await _issue(service, uuid.uuid4())

        assert len(await service.list_invoices(student_id=student_id)) == 1


class TestPayment:
    """Test suite for mark_as_paid() and mark_as_unpaid()."""

    @pytest.mark.asyncio
    async def test_mark_as_paid(self, service: InvoiceService, signal) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-03-10")

        paid = await service.mark_as_paid(invoice["id"], InvoicePaymentMethod.PIX)

        assert paid["status"] is InvoiceStatus.PAID
        assert paid["paid_at"] == date(2025, 3, 15)
        assert paid["payment_method"] is InvoicePaymentMethod.PIX
        assert signal.snapshot().reason == "invoice.paid"

    @pytest.mark.asyncio
    async def test_paid_invoice_is_not_made_overdue(self, service: InvoiceService) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-03-10")
        await service.mark_as_paid(invoice["id"], "cash")

        listed = await service.list_invoices()

        assert listed[0]["status"] is InvoiceStatus.PAID

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("due_date", "expected"),
        [
            ("2025-03-10", InvoiceStatus.OVERDUE),
            ("2025-03-15", InvoiceStatus.OVERDUE),
            ("2025-03-16", InvoiceStatus.PENDING),
        ],
    )
    async def test_mark_as_unpaid_restores_status(self, service: InvoiceService, due_date: str, expected) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date=due_date)
        await service.mark_as_paid(invoice["id"], InvoicePaymentMethod.CREDIT_CARD)

        unpaid = await service.mark_as_unpaid(invoice["id"])

        assert unpaid["status"] is expected
        assert unpaid["paid_at"] is None
        assert unpaid["payment_method"] is None

    @pytest.mark.asyncio
    async def test_missing_invoice(self, service: InvoiceService) -> None:
        with pytest.raises(InvoiceNotFoundError):
            await service.mark_as_paid(uuid.uuid4(), InvoicePaymentMethod.PIX)
        with pytest.raises(InvoiceNotFoundError):
            await service.mark_as_unpaid(uuid.uuid4())


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_normalizes_values(self, service: InvoiceService, signal) -> None:
        invoice = await _issue(service, uuid.uuid4())

        updated = await service.update_invoice(
            invoice["id"],
            {"amount": 180, "month": 4, "due_date": "05/04/2025", "description": None},
        )

        assert updated["amount"] == 180.0
        assert updated["month"] == "04"
        assert updated["due_date"] == date(2025, 4, 5)
        assert updated["description"] == invoice["description"]
        assert signal.snapshot().reason == "invoice.updated"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [-5, 0, float("nan"), float("inf")])
    async def test_update_rejects_invalid_amount(self, service: InvoiceService, amount: float) -> None:
        invoice = await _issue(service, uuid.uuid4())
        with pytest.raises(ValidationError, match="greater than zero"):
            await service.update_invoice(invoice["id"], {"amount": amount})

    @pytest.mark.asyncio
    async def test_update_missing(self, service: InvoiceService) -> None:
        with pytest.raises(InvoiceNotFoundError):
            await service.update_invoice(uuid.uuid4(), {"amount": 100})

    @pytest.mark.asyncio
    async def test_delete(self, service: InvoiceService, signal) -> None:
        invoice = await _issue(service, uuid.uuid4())

        assert await service.delete_invoice(invoice["id"]) is True
        assert signal.snapshot().reason == "invoice.deleted"
        with pytest.raises(InvoiceNotFoundError):
            await service.delete_invoice(invoice["id"])


class TestStatusFollowsDueDate:
    """Test suite for edits that change status or due date."""

    @pytest.mark.asyncio
    async def test_rescheduled_overdue_invoice_returns_to_pending(self, service: InvoiceService) -> None:
        # Arrange
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-03-01")
        await service.list_invoices()

        # Act
        updated = await service.update_invoice(invoice["id"], {"due_date": "2025-04-30"})
        listed = await service.list_invoices()

        # Assert
        assert updated["status"] is InvoiceStatus.PENDING
        assert listed[0]["status"] is InvoiceStatus.PENDING

    @pytest.mark.asyncio
    async def test_overdue_refresh_reverts_rescheduled_rows(self, service: InvoiceService, test_async_db) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-04-30")
        await invoice_crud.update_by_id(test_async_db, invoice["id"], status=InvoiceStatus.OVERDUE)

        assert await service.refresh_overdue() == 1
        assert (await service.get_invoice(invoice["id"]))["status"] is InvoiceStatus.PENDING

    @pytest.mark.asyncio
    async def test_overdue_status_on_future_due_date_is_corrected(self, service: InvoiceService) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-04-30")

        updated = await service.update_invoice(invoice["id"], {"status": "overdue"})
        listed = await service.list_invoices()

        assert updated["status"] is InvoiceStatus.PENDING
        assert listed[0]["status"] is InvoiceStatus.PENDING

    @pytest.mark.asyncio
    async def test_pending_status_on_past_due_date_is_corrected(self, service: InvoiceService) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-03-01")

        updated = await service.update_invoice(invoice["id"], {"status": InvoiceStatus.PENDING})

        assert updated["status"] is InvoiceStatus.OVERDUE

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("due_date", "expected"),
        [("2025-03-10", InvoiceStatus.OVERDUE), ("2025-03-20", InvoiceStatus.PENDING)],
    )
    async def test_unpaying_through_edit_clears_payment(
        self, service: InvoiceService, due_date: str, expected
    ) -> None:
        # Arrange
        invoice = await _issue(service, uuid.uuid4(), due_date=due_date)
        await service.mark_as_paid(invoice["id"], InvoicePaymentMethod.PIX)

        # Act
        updated = await service.update_invoice(invoice["id"], {"status": "pending"})

        # Assert
        assert updated["status"] is expected
        assert updated["paid_at"] is None
        assert updated["payment_method"] is None

    @pytest.mark.asyncio
    async def test_editing_paid_invoice_keeps_payment(self, service: InvoiceService) -> None:
        invoice = await _issue(service, uuid.uuid4(), due_date="2025-03-10")
        await service.mark_as_paid(invoice["id"], InvoicePaymentMethod.CASH)

        updated = await service.update_invoice(invoice["id"], {"amount": 170, "due_date": "2025-04-10"})

        assert updated["status"] is InvoiceStatus.PAID
        assert updated["paid_at"] == date(2025, 3, 15)
        assert updated["payment_method"] is InvoicePaymentMethod.CASH

    @pytest.mark.asyncio
    async def test_paid_status_requires_pay_operation(self, service: InvoiceService, signal) -> None:
        invoice = await _issue(service, uuid.uuid4())
        revision = signal.snapshot().revision

        with pytest.raises(ValidationError, match="pay endpoint"):
            await service.update_invoice(invoice["id"], {"status": "paid"})
        assert signal.snapshot().revision == revision


class TestGenerateMonthlyInvoices:
    """Test suite for InvoiceService.generate_monthly_invoices()."""

    @pytest.mark.asyncio
    async def test_one_invoice_per_active_paying_student(self, service: InvoiceService, test_async_db, signal) -> None:
        # Arrange
        ana = await _student(test_async_db, "Ana", "ana@academia.com", monthly_fee=150)
        await _student(test_async_db, "Bruno", "bruno@academia.com", monthly_fee=0)
        await _student(test_async_db, "Carla", "carla@academia.com", status=StudentStatus.INACTIVE)

        # Act
        result = await service.generate_monthly_invoices(month=4, year=2025, pix_key="pix@academia.com")

        # Assert
        assert result["skipped"] == 0
        assert len(result["created"]) == 1
        created = result["created"][0]
        assert created["student_id"] == ana.id
        assert created["student_name"] == "Ana"
        assert created["amount"] == 150.0
        assert created["month"] == "04"
        assert created["due_date"] == date(2025, 4, 10)
        assert created["description"] == "Mensalidade - Abril/2025"
        assert created["pix_key"] == "pix@academia.com"
        assert signal.snapshot().reason == "invoice.generated"

    @pytest.mark.asyncio
    async def test_second_run_skips_billed_students(self, service: InvoiceService, test_async_db) -> None:
        await _student(test_async_db, "Ana", "ana@academia.com")
        await service.generate_monthly_invoices(month="04", year=2025)

        result = await service.generate_monthly_invoices(month="04", year=2025)

        assert result == {"created": [], "skipped": 1}

    @pytest.mark.asyncio
    async def test_due_day_clamped_to_month_length(self, service: InvoiceService, test_async_db) -> None:
        await _student(test_async_db, "Ana", "ana@academia.com")

        result = await service.generate_monthly_invoices(month=2, year=2025, due_day=31)

        assert result["created"][0]["due_date"] == date(2025, 2, 28)

    @pytest.mark.asyncio
    async def test_invalid_month(self, service: InvoiceService) -> None:
        with pytest.raises(ValidationError):
            await service.generate_monthly_invoices(month=13, year=2025)


class TestInvoiceStats:
    @pytest.mark.asyncio
    async def test_stats_reflect_overdue_and_payments(self, service: InvoiceService) -> None:
        # Arrange
        student_id = uuid.uuid4()
        paid = await _issue(service, student_id, due_date="2025-03-10", amount=150)
        await _issue(service, student_id, due_date="2025-03-01", amount=200)
        await _issue(service, uuid.uuid4(), due_date="2025-03-30", amount=1000)
        await service.mark_as_paid(paid["id"], InvoicePaymentMethod.PIX)

        # Act
        stats = await service.get_stats()
        student_stats = await service.get_stats(student_id=student_id)

        # Assert
        assert (stats["total"], stats["paid"], stats["pending"], stats["overdue"]) == (3, 1, 1, 1)
        assert stats["total_amount"] == 1350.0
        assert stats["paid_amount"] == 150.0
        assert stats["pending_amount"] == 1200.0
        assert stats["formatted_total_amount"] == "R$ 1.350,00"
        assert student_stats["total"] == 2
