"""
Dashboard service orchestrator.

Assembles the dashboard figures from the roster, cash book, invoices and
attendance log, and exposes the refresh revision clients poll.

Dependencies: backend.application.services, backend.boundary.db.CRUD, backend.core
System role: Dashboard read model
"""

import logging
from datetime import date
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services.invoice_service import InvoiceService
from backend.application.services.student_service import attendance_to_dict
from backend.application.services.transaction_service import TransactionService
from backend.boundary.db.CRUD.attendance_crud import attendance_crud
from backend.boundary.db.CRUD.invoice_crud import invoice_crud
from backend.boundary.db.CRUD.student_crud import student_crud
from backend.configs import get_settings
from backend.configs.academy import AcademySettings
from backend.core.dashboard_signal import DashboardSignal, dashboard_signal
from backend.core.dates import academy_today
from backend.core.enums import StudentStatus

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-only dashboard aggregation."""

    def __init__(
        self,
        db: AsyncSession,
        settings: AcademySettings | None = None,
        signal: DashboardSignal | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """
        Initialize dashboard service.

        Args:
            db: Async SQLAlchemy session
            settings: Academy settings (loaded from environment when None)
            signal: Dashboard signal (process-wide signal when None)
            today: Returns the academy-local date; injectable for tests
        """
        self.db = db
        self.settings = settings or get_settings().academy
        self.signal = signal or dashboard_signal
        self._today = today or (lambda: academy_today(self.settings.timezone))
        self.transactions = TransactionService(db, self.settings, self.signal, today=self._today)
        self.invoices = InvoiceService(db, self.settings, self.signal, today=self._today)

    def get_revision(self) -> dict:
        snapshot = self.signal.snapshot()
        return {
            "revision": snapshot.revision,
            "changed_at": snapshot.changed_at,
            "reason": snapshot.reason,
        }

    async def get_summary(self) -> dict:
        """
        Dashboard figures.

        Returns:
            dict: students (counts by status), monthly (cash-book stats),
                attendance_today (count and share of active students),
                students_with_overdue_invoices, invoices (stats),
                recent_attendances, revision
        """
        revision = self.signal.snapshot().revision
        today = self._today()

        counts = await student_crud.count_by_status(self.db)
        active = counts[StudentStatus.ACTIVE]

        monthly = await self.transactions.get_monthly_stats(today)
        invoice_stats = await self.invoices.get_stats()
        overdue_students = await invoice_crud.get_overdue_student_ids(self.db)

        attended_today = await attendance_crud.count_on_date(self.db, today.isoformat())
        percentage = round(attended_today / active * 100, 1) if active else 0.0

        recent = await attendance_crud.get_recent(self.db, limit=self.settings.recent_activity_limit)

        logger.debug("Dashboard summary built", extra={"revision": revision})
        return {
            "students": {
                "total": sum(counts.values()),
                "active": active,
                "inactive": counts[StudentStatus.INACTIVE],
                "suspended": counts[StudentStatus.SUSPENDED],
            },
            "monthly": monthly,
            "attendance_today": {"count": attended_today, "percentage_of_active": percentage},
            "students_with_overdue_invoices": len(overdue_students),
            "invoices": invoice_stats,
            "recent_attendances": [attendance_to_dict(a) for a in recent],
            "revision": revision,
        }
