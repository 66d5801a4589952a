"""
Dashboard API endpoints.

Routes:
- GET /dashboard/summary - Dashboard figures
- GET /dashboard/revision - Refresh revision for cheap polling

Dependencies: backend.application.services, backend.models
System role: Dashboard HTTP API (admin only)
"""

from fastapi import APIRouter, Depends

from backend.api.deps import get_dashboard_service, require_admin
from backend.api.routers.router_utils import handle_domain_errors
from backend.application.services import DashboardService
from backend.models.dashboard import DashboardSummaryResponse, RevisionResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(require_admin)])


@router.get("/summary", response_model=DashboardSummaryResponse)
@handle_domain_errors
async def get_summary(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardSummaryResponse:
    """
    Student counts, monthly cash-book stats, today's attendance, overdue
    students, invoice stats and recent check-ins.
    """
    summary = await dashboard_service.get_summary()
    return DashboardSummaryResponse(**summary)


@router.get("/revision", response_model=RevisionResponse)
@handle_domain_errors
async def get_revision(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> RevisionResponse:
    """
    Current refresh revision.

    Clients poll this and refetch /dashboard/summary only when the revision
    changes. No database access.
    """
    return RevisionResponse(**dashboard_service.get_revision())
