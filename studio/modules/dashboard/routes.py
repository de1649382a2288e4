from fastapi import APIRouter, Depends
from studio.database.supabase_client import get_supabase
from studio.modules.dashboard.schemas import DashboardSummary
from studio.modules.dashboard.service import DashboardService
from studio.modules.deployments.service import DeploymentService
from studio.modules.logs.service import LogService
from studio.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(DeploymentService(supabase), LogService(supabase))


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(
    user_data: Dict = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Counts of deployments by status plus the latest log entries"""
    return service.get_summary(user_data["id"])
