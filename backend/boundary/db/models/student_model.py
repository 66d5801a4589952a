"""
Student ORM model.

Represents an enrolled academy member with belt rank, billing state and
attendance counter. Belt promotions are kept as a JSON list so the history
keeps its free-form shape.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Student roster persistence
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_type
from backend.core.enums import BeltLevel, PaymentStatus, StudentStatus


class StudentModel(Base, UUIDMixin, TimestampMixin):
    """
    Student ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Full name
        email: Contact email, stored lowercased (unique)
        cpf: Brazilian taxpayer id, digits or formatted (optional)
        phone: Contact phone (optional)
        belt: Current belt rank
        status: Enrollment state (active/inactive/suspended)
        payment_status: Monthly fee state (paid/pending/overdue)
        monthly_fee: Fee charged by generated monthly invoices
        last_payment: Timestamp of the last registered payment
        next_payment_due: Timestamp the next fee is due
        total_attendances: Number of registered attendances
        belt_history: List of {"from", "to", "date", "notes"} entries, oldest first
        created_at: Enrollment timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Constraints:
        email: UNIQUE constraint; one student per email
    """

    __tablename__ = "students"

    name: Mapped[str] = mapped_column(String(255), nullable=False, doc="Full name")

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        doc="Lowercased contact email",
    )

    cpf: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)

    belt: Mapped[BeltLevel] = mapped_column(
        enum_type(BeltLevel),
        nullable=False,
        default=BeltLevel.BRANCA,
        index=True,
    )

    status: Mapped[StudentStatus] = mapped_column(
        enum_type(StudentStatus),
        nullable=False,
        default=StudentStatus.ACTIVE,
        index=True,
    )

    payment_status: Mapped[PaymentStatus] = mapped_column(
        enum_type(PaymentStatus),
        nullable=False,
        default=PaymentStatus.PAID,
    )

    monthly_fee: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    last_payment: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    next_payment_due: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    total_attendances: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    belt_history: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Belt promotions: [{from, to, date, notes}]",
    )
