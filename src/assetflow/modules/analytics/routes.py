"""Analytics API routes."""

from fastapi import APIRouter, Depends

from assetflow.core.auth.dependencies import OrganizationId, require_admin
from assetflow.modules.analytics.schemas import DashboardResponse
from assetflow.modules.analytics.services import AnalyticsSvc


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    dependencies=[Depends(require_admin)],
    summary="Dashboard analytics",
    description="Admin only. Ticket totals, tickets per asset and a 7-day timeline.",
)
async def get_dashboard(
    organization_id: OrganizationId,
    service: AnalyticsSvc,
) -> DashboardResponse:
    return await service.get_dashboard(organization_id)
