"""
Student CRUD operations.

Provides Create, Read, Update, Delete operations for StudentModel
with roster search and email lookup.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Student roster persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.student_model import StudentModel
from backend.core.enums import BeltLevel, StudentStatus

LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in `term` matched literally."""
    escaped = term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", LIKE_ESCAPE + "%").replace("_", LIKE_ESCAPE + "_")
    return f"%{escaped}%"


class StudentCRUD(BaseCRUD[StudentModel]):
    """
    CRUD operations for StudentModel.

    Students are listed alphabetically by name unless told otherwise.
    """

    default_order = "name"

    def __init__(self) -> None:
        """Initialize StudentCRUD with StudentModel."""
        super().__init__(StudentModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> StudentModel | None:
        """
        Retrieve student by email (case-insensitive).

        Args:
            session: Async database session
            email: Contact email

        Returns:
            StudentModel if found, None otherwise
        """
        stmt = select(StudentModel).where(StudentModel.email == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(
        self,
        session: AsyncSession,
        term: str | None = None,
        belt: BeltLevel | None = None,
        status: StudentStatus | None = None,
    ) -> Sequence[StudentModel]:
        """
        Filter the roster.

        Args:
            session: Async database session
            term: Case-insensitive substring matched against name or email
            belt: Only students with this belt
            status: Only students with this enrollment status

        Returns:
            Sequence of StudentModels ordered by name
        """
        stmt = select(StudentModel)
        if term:
            pattern = _like_pattern(term.strip().lower())
            stmt = stmt.where(
                or_(
                    func.lower(StudentModel.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(StudentModel.email).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if belt is not None:
            stmt = stmt.where(StudentModel.belt == belt)
        if status is not None:
            stmt = stmt.where(StudentModel.status == status)
        stmt = stmt.order_by(StudentModel.name.asc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_status(self, session: AsyncSession) -> dict[StudentStatus, int]:
        """
        Count students per enrollment status.

        Returns:
            Mapping with every StudentStatus as key (0 when none)
        """
        stmt = select(StudentModel.status, func.count()).group_by(StudentModel.status)
        result = await session.execute(stmt)
        counts = {status: 0 for status in StudentStatus}
        for status, total in result.all():
            counts[StudentStatus(status)] = int(total)
        return counts


    async def increment_attendances(self, session: AsyncSession, id: UUID) -> StudentModel | None:
        """Add one check-in to the counter in a single UPDATE (no read-modify-write)."""
        return await self.update_by_id(
            session,
            id,
            total_attendances=func.coalesce(StudentModel.total_attendances, 0) + 1,
        )


student_crud = StudentCRUD()
