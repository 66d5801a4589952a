"""
Dashboard models and schemas.

Dependencies: pydantic
System role: Dashboard API contracts
"""

from datetime import datetime

from pydantic import BaseModel

from backend.models.invoice import InvoiceStatsResponse
from backend.models.student import AttendanceResponse
from backend.models.transaction import MonthlyStatsResponse


class StudentCounts(BaseModel):
    total: int
    active: int
    inactive: int
    suspended: int


class AttendanceToday(BaseModel):
    count: int
    percentage_of_active: float


class RevisionResponse(BaseModel):
    """Current dashboard refresh revision; refetch the summary when it moves."""

    revision: int
    changed_at: datetime | None = None
    reason: str | None = None


class DashboardSummaryResponse(BaseModel):
    """Figures shown on the dashboard tab."""

    students: StudentCounts
    monthly: MonthlyStatsResponse
    attendance_today: AttendanceToday
    students_with_overdue_invoices: int
    invoices: InvoiceStatsResponse
    recent_attendances: list[AttendanceResponse]
    revision: int
