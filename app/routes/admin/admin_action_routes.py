from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import require_admin
from app.services.admin.admin_action_services import AdminActionService
from app.models.admin.admin_action_models import AdminActionType, AdminTargetType, AdminActionResponse, AdminActionListResponse, AdminActivitySummaryResponse
from typing import Optional, List

admin_action_router = APIRouter(prefix="/admin/actions", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_admin_action_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AdminActionService:
    """Dependency to get AdminActionService instance"""
    return AdminActionService(supabase_client)


@admin_action_router.get("", response_model=AdminActionListResponse)
async def get_actions(
    admin_id: Optional[str] = Query(None, description="Acting admin id"),
    action_type: Optional[AdminActionType] = Query(None, description="Action type"),
    target_type: Optional[AdminTargetType] = Query(None, description="Target type"),
    target_id: Optional[str] = Query(None, description="Target id"),
    start_date: Optional[str] = Query(None, description="Created on or after (ISO date)"),
    end_date: Optional[str] = Query(None, description="Created on or before (ISO date)"),
    limit: int = Query(100, ge=1, le=500, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    admin_action_service: AdminActionService = Depends(get_admin_action_service),
):
    """Audit log"""
    return await admin_action_service.get_actions(
        admin_id,
        action_type.value if action_type else None,
        target_type.value if target_type else None,
        target_id,
        start_date,
        end_date,
        limit,
        offset,
    )


# --------------------------------------------------------------


@admin_action_router.get("/history", response_model=List[AdminActionResponse])
async def get_target_history(
    target_type: AdminTargetType = Query(..., description="Target type"),
    target_id: str = Query(..., description="Target id"),
    limit: int = Query(20, ge=1, le=100, description="Number of entries"),
    admin_action_service: AdminActionService = Depends(get_admin_action_service),
):
    """Every admin action on one target"""
    return await admin_action_service.get_target_history(target_type.value, target_id, limit)


# --------------------------------------------------------------


@admin_action_router.get("/summary/{admin_id}", response_model=AdminActivitySummaryResponse)
async def get_activity_summary(
    admin_id: str,
    days: int = Query(30, ge=1, le=365, description="Look back window in days"),
    admin_action_service: AdminActionService = Depends(get_admin_action_service),
):
    """Activity of one admin"""
    return await admin_action_service.get_activity_summary(admin_id, days)
