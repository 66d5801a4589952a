"""
Attendance ORM model.

One row per class check-in. The student name is copied at check-in time so
activity feeds render without a join, and student_id is a plain reference
(no foreign key), matching the other collections.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Attendance log persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin


class AttendanceModel(Base, UUIDMixin, TimestampMixin):
    """
    Attendance ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        student_id: Referenced student UUID
        student_name: Student name at check-in time
        date: Local calendar day of the check-in, "YYYY-MM-DD"
        timestamp: Check-in instant (timezone-aware)
        notes: Free-text notes (empty string when none)
    """

    __tablename__ = "attendances"

    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    student_name: Mapped[str] = mapped_column(String(255), nullable=False)

    date: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        index=True,
        doc="Academy-local date, YYYY-MM-DD",
    )

    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    notes: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
