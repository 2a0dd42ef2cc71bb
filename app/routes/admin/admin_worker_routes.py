from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import AdminContext, require_admin, get_request_meta
from app.services.admin.admin_worker_services import AdminWorkerService
from app.models.admin.admin_worker_models import (
    ApprovalStatus,
    ProfileStatus,
    WorkerApprovalRequest,
    WorkerRejectionRequest,
    AccountActionRequest,
    AdminNotesUpdate,
    AdminWorkerProfileUpdate,
    AdminWorkerListResponse,
    AdminWorkerDetail,
)
from app.models.admin.admin_action_models import RequestMeta, ActionResultResponse
from app.models.user_models import AccountStatus
from typing import Optional

admin_worker_router = APIRouter(prefix="/admin/workers", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_admin_worker_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AdminWorkerService:
    """Dependency to get AdminWorkerService instance"""
    return AdminWorkerService(supabase_client)


# =====================================
# READ ENDPOINTS
# =====================================


@admin_worker_router.get("", response_model=AdminWorkerListResponse)
async def get_workers(
    status: Optional[ApprovalStatus] = Query(None, description="Approval status"),
    account_status: Optional[AccountStatus] = Query(None, description="Account status"),
    profile_status: Optional[ProfileStatus] = Query(None, description="Profile status"),
    city: Optional[str] = Query(None, description="City"),
    service_type: Optional[str] = Query(None, description="assistance or companionship"),
    verified: Optional[bool] = Query(None, description="Verified profiles only"),
    search: Optional[str] = Query(None, description="Name or email contains"),
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Workers with their profile for the moderation table"""
    return await admin_worker_service.get_workers(status, account_status, profile_status, city, service_type, verified, search, limit, offset)


# --------------------------------------------------------------


@admin_worker_router.get("/{worker_id}", response_model=AdminWorkerDetail)
async def get_worker(worker_id: str, admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service)):
    """Worker detail with moderation fields"""
    return await admin_worker_service.get_worker(worker_id)


# =====================================
# MODERATION ENDPOINTS
# =====================================


@admin_worker_router.post("/{worker_id}/approve", response_model=ActionResultResponse)
async def approve_worker(
    worker_id: str,
    body: WorkerApprovalRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Approve a worker profile"""
    return await admin_worker_service.approve_worker(worker_id, body, admin, meta)


# --------------------------------------------------------------


@admin_worker_router.post("/{worker_id}/reject", response_model=ActionResultResponse)
async def reject_worker(
    worker_id: str,
    body: WorkerRejectionRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Reject a worker profile with a reason"""
    return await admin_worker_service.reject_worker(worker_id, body, admin, meta)


# --------------------------------------------------------------


@admin_worker_router.post("/{worker_id}/suspend", response_model=ActionResultResponse)
async def suspend_worker(
    worker_id: str,
    body: AccountActionRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Suspend or unsuspend the worker account"""
    return await admin_worker_service.suspend_or_unsuspend(worker_id, body, admin, meta)


# --------------------------------------------------------------


@admin_worker_router.post("/{worker_id}/ban", response_model=ActionResultResponse)
async def ban_worker(
    worker_id: str,
    body: AccountActionRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Ban or unban the worker account"""
    return await admin_worker_service.ban_or_unban(worker_id, body, admin, meta)


# --------------------------------------------------------------


@admin_worker_router.put("/{worker_id}/notes", response_model=ActionResultResponse)
async def update_worker_notes(
    worker_id: str,
    body: AdminNotesUpdate,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Replace the internal admin notes"""
    return await admin_worker_service.update_admin_notes(worker_id, body, admin, meta)


# --------------------------------------------------------------


@admin_worker_router.patch("/{worker_id}", response_model=ActionResultResponse)
async def update_worker(
    worker_id: str,
    body: AdminWorkerProfileUpdate,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_worker_service: AdminWorkerService = Depends(get_admin_worker_service),
):
    """Admin override of worker profile fields"""
    return await admin_worker_service.update_worker_profile(worker_id, body, admin, meta)
