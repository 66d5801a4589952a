"""
Invoice CRUD operations.

Provides Create, Read, Update, Delete operations for InvoiceModel
with billing-period and overdue queries.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Billing persistence operations
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.invoice_model import InvoiceModel
from backend.core.enums import InvoiceStatus


class InvoiceCRUD(BaseCRUD[InvoiceModel]):
    """
    CRUD operations for InvoiceModel.

    Listings are ordered by billing period, most recent first.
    """

    def __init__(self) -> None:
        """Initialize InvoiceCRUD with InvoiceModel."""
        super().__init__(InvoiceModel)

    @staticmethod
    def _period_order():
        return (InvoiceModel.year.desc(), InvoiceModel.month.desc(), InvoiceModel.created_at.desc())

    async def get_all_ordered(self, session: AsyncSession) -> Sequence[InvoiceModel]:
        """All invoices, year desc then month desc."""
        stmt = select(InvoiceModel).order_by(*self._period_order())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_student(
        self,
        session: AsyncSession,
        student_id: UUID,
    ) -> Sequence[InvoiceModel]:
        """
        Retrieve a student's invoices, year desc then month desc.

        Args:
            session: Async database session
            student_id: Student UUID

        Returns:
            Sequence of InvoiceModels
        """
        stmt = (
            select(InvoiceModel)
            .where(InvoiceModel.student_id == student_id)
            .order_by(*self._period_order())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_period(
        self,
        session: AsyncSession,
        month: str,
        year: int,
    ) -> Sequence[InvoiceModel]:
        """
        Retrieve invoices of one billing period.

        Args:
            session: Async database session
            month: Two-digit month, "01".."12"
            year: Billing year

        Returns:
            Sequence of InvoiceModels
        """
        stmt = select(InvoiceModel).where(InvoiceModel.month == month, InvoiceModel.year == year)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def sync_unpaid_statuses(self, session: AsyncSession, today: date) -> int:
        """
        Persist the due-date status of every unpaid invoice.

        Pending invoices due on or before `today` become overdue; overdue
        invoices whose due date is still ahead return to pending.

        Args:
            session: Async database session
            today: Reference date in academy timezone

        Returns:
            Number of invoices whose status changed
        """
        moved = 0
        for current, target, condition in (
            (InvoiceStatus.PENDING, InvoiceStatus.OVERDUE, InvoiceModel.due_date <= today),
            (InvoiceStatus.OVERDUE, InvoiceStatus.PENDING, InvoiceModel.due_date > today),
        ):
            stmt = (
                update(InvoiceModel)
                .where(InvoiceModel.status == current, condition)
                .values(status=target)
                .execution_options(synchronize_session="fetch")
            )
            result = await session.execute(stmt)
            moved += result.rowcount
        return moved

    async def get_overdue_student_ids(self, session: AsyncSession) -> set[UUID]:
        """Distinct ids of students holding at least one overdue invoice."""
        stmt = select(InvoiceModel.student_id).where(InvoiceModel.status == InvoiceStatus.OVERDUE).distinct()
        result = await session.execute(stmt)
        return set(result.scalars().all())


invoice_crud = InvoiceCRUD()
