"""
Transaction ORM model.

Cash-book entry for the financial tab: revenue (fees, sales) or expense
(rent, equipment). Optionally tied to a student by plain id reference.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Financial ledger persistence
"""

import uuid

from sqlalchemy import Float, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_type
from backend.core.enums import PaymentMethod, TransactionType


class TransactionModel(Base, UUIDMixin, TimestampMixin):
    """
    Transaction ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        type: revenue or expense
        amount: Positive amount in BRL
        description: What the entry is for
        category: Grouping label ("Mensalidade", "Aluguel", "Outros", ...)
        payment_method: How the money moved (optional)
        student_id: Related student (optional)
        student_name: Related student name (optional)
        notes: Free-text notes (optional)
        created_at: Entry timestamp (UTC); monthly stats bucket on this
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "transactions"

    type: Mapped[TransactionType] = mapped_column(
        enum_type(TransactionType),
        nullable=False,
        default=TransactionType.REVENUE,
        index=True,
    )

    amount: Mapped[float] = mapped_column(Float, nullable=False)

    description: Mapped[str] = mapped_column(String(512), nullable=False)

    category: Mapped[str] = mapped_column(String(100), nullable=False, default="Outros")

    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        enum_type(PaymentMethod),
        nullable=True,
        default=None,
    )

    student_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, default=None)

    student_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)

    notes: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
