"""
Invoice ORM model.

Monthly fee bill for one student and one billing period.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Billing persistence
"""

import uuid
from datetime import date

from sqlalchemy import Date, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_type
from backend.core.enums import InvoicePaymentMethod, InvoiceStatus


class InvoiceModel(Base, UUIDMixin, TimestampMixin):
    """
    Invoice ORM model.

    Status is stored, but pending invoices past their due date are moved to
    overdue when invoices are listed (see InvoiceService.list_invoices).

    Attributes:
        id: UUID primary key (auto-generated)
        student_id: Billed student UUID (plain reference)
        student_name: Billed student name at issue time
        month: Billing month, "01".."12"
        year: Billing year
        amount: Amount due in BRL
        due_date: Payment due date
        status: pending, paid or overdue
        description: Human readable line, e.g. "Mensalidade - Março/2025"
        pix_key: PIX key shown to the student (may be empty)
        paid_at: Date the payment was registered (paid only)
        payment_method: How it was paid (paid only)
    """

    __tablename__ = "invoices"

    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    student_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    month: Mapped[str] = mapped_column(String(2), nullable=False)

    year: Mapped[int] = mapped_column(Integer, nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False)

    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    status: Mapped[InvoiceStatus] = mapped_column(
        enum_type(InvoiceStatus),
        nullable=False,
        default=InvoiceStatus.PENDING,
        index=True,
    )

    description: Mapped[str] = mapped_column(String(512), nullable=False, default="")

    pix_key: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    paid_at: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)

    payment_method: Mapped[InvoicePaymentMethod | None] = mapped_column(
        enum_type(InvoicePaymentMethod),
        nullable=True,
        default=None,
    )
