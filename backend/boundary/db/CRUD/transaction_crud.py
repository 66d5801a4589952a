"""
Transaction CRUD operations.

Provides Create, Read, Update, Delete operations for TransactionModel
with date-range queries used by monthly statistics.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Financial ledger persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.transaction_model import TransactionModel
from backend.core.enums import TransactionType


class TransactionCRUD(BaseCRUD[TransactionModel]):
    """
    CRUD operations for TransactionModel.

    Entries are listed newest first.
    """

    default_order = "created_at"
    default_descending = True

    def __init__(self) -> None:
        """Initialize TransactionCRUD with TransactionModel."""
        super().__init__(TransactionModel)

    async def get_in_range(
        self,
        session: AsyncSession,
        start: datetime,
        end: datetime,
        type_: TransactionType | None = None,
    ) -> Sequence[TransactionModel]:
        """
        Retrieve entries created in [start, end).

        Args:
            session: Async database session
            start: Inclusive lower bound (UTC)
            end: Exclusive upper bound (UTC)
            type_: Optional revenue/expense filter

        Returns:
            Sequence of TransactionModels, newest first
        """
        stmt = select(TransactionModel).where(
            TransactionModel.created_at >= start,
            TransactionModel.created_at < end,
        )
        if type_ is not None:
            stmt = stmt.where(TransactionModel.type == type_)
        stmt = stmt.order_by(TransactionModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()


transaction_crud = TransactionCRUD()
