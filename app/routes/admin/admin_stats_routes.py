from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import require_admin
from app.services.admin.admin_stats_services import AdminStatsService
from app.models.admin.admin_stats_models import StatsType, DashboardStats, GrowthStats, RevenueStats
from typing import Union

admin_stats_router = APIRouter(prefix="/admin/stats", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_admin_stats_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AdminStatsService:
    """Dependency to get AdminStatsService instance"""
    return AdminStatsService(supabase_client)


@admin_stats_router.get("", response_model=Union[DashboardStats, GrowthStats, RevenueStats])
async def get_stats(
    type: StatsType = Query(StatsType.DASHBOARD, description="dashboard, growth or revenue"),
    days: int = Query(30, ge=1, le=365, description="Days covered by growth and revenue series"),
    admin_stats_service: AdminStatsService = Depends(get_admin_stats_service),
):
    """Dashboard counters or a daily series"""
    if type == StatsType.GROWTH:
        return await admin_stats_service.get_growth_stats(days)
    if type == StatsType.REVENUE:
        return await admin_stats_service.get_revenue_stats(days)
    return await admin_stats_service.get_dashboard_stats()
