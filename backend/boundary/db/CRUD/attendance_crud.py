"""
Attendance CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Attendance log persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.attendance_model import AttendanceModel


class AttendanceCRUD(BaseCRUD[AttendanceModel]):
    """CRUD operations for AttendanceModel, newest check-in first."""

    default_order = "timestamp"
    default_descending = True

    def __init__(self) -> None:
        """Initialize AttendanceCRUD with AttendanceModel."""
        super().__init__(AttendanceModel)

    async def get_for_student(
        self,
        session: AsyncSession,
        student_id: UUID,
        limit: int | None = None,
    ) -> Sequence[AttendanceModel]:
        """
        Retrieve a student's check-ins, newest first.

        Args:
            session: Async database session
            student_id: Student UUID
            limit: Maximum number of rows to return

        Returns:
            Sequence of AttendanceModels
        """
        stmt = (
            select(AttendanceModel)
            .where(AttendanceModel.student_id == student_id)
            .order_by(AttendanceModel.timestamp.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_on_date(self, session: AsyncSession, day: str) -> int:
        """
        Count check-ins on a local calendar day ("YYYY-MM-DD").
        """
        stmt = select(func.count()).select_from(AttendanceModel).where(AttendanceModel.date == day)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def get_recent(self, session: AsyncSession, limit: int = 10) -> Sequence[AttendanceModel]:
        """Latest check-ins across all students."""
        stmt = select(AttendanceModel).order_by(AttendanceModel.timestamp.desc()).limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


attendance_crud = AttendanceCRUD()
