"""Dashboard router."""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from taskdesk.middleware.auth import get_current_owner
from taskdesk.routers.deps import get_dashboard_service
from taskdesk.schemas.common import ApiResponse, ok
from taskdesk.services.dashboard_service import DashboardService, DashboardSummary, parse_period

router = APIRouter(tags=["Dashboard"])


@router.get("/summary", response_model=ApiResponse[DashboardSummary], response_model_exclude_unset=True)
async def summary(
    owner_id: str = Depends(get_current_owner),
    service: DashboardService = Depends(get_dashboard_service),
    period: Optional[str] = Query(None, description="Upcoming window in days: 7 or 30"),
):
    """Status counts, overdue count and the next few upcoming tasks."""
    return ok(await service.summary(owner_id, parse_period(period)))
