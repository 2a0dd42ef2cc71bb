from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import AdminContext, require_admin, get_request_meta
from app.services.admin.admin_client_services import AdminClientService
from app.models.admin.admin_client_models import (
    ClientWarningRequest,
    AdminEmployerProfileUpdate,
    AdminClientListResponse,
    AdminClientDetail,
    ClientBookingsResponse,
    ClientReviewsResponse,
)
from app.models.admin.admin_worker_models import AccountActionRequest
from app.models.admin.admin_action_models import RequestMeta, ActionResultResponse
from app.models.user_models import AccountStatus
from typing import Optional

admin_client_router = APIRouter(prefix="/admin/clients", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_admin_client_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AdminClientService:
    """Dependency to get AdminClientService instance"""
    return AdminClientService(supabase_client)


# =====================================
# READ ENDPOINTS
# =====================================


@admin_client_router.get("", response_model=AdminClientListResponse)
async def get_clients(
    account_status: Optional[AccountStatus] = Query(None, description="Account status"),
    verified: Optional[bool] = Query(None, description="Verified companies only"),
    city: Optional[str] = Query(None, description="City"),
    industry: Optional[str] = Query(None, description="Industry"),
    company_size: Optional[str] = Query(None, description="Company size"),
    search: Optional[str] = Query(None, description="Name or email contains"),
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Employers with their company profile"""
    return await admin_client_service.get_clients(account_status, verified, city, industry, company_size, search, limit, offset)


# --------------------------------------------------------------


@admin_client_router.get("/{client_id}", response_model=AdminClientDetail)
async def get_client(client_id: str, admin_client_service: AdminClientService = Depends(get_admin_client_service)):
    """Employer detail with moderation fields"""
    return await admin_client_service.get_client(client_id)


# --------------------------------------------------------------


@admin_client_router.get("/{client_id}/bookings", response_model=ClientBookingsResponse)
async def get_client_bookings(
    client_id: str,
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Bookings made by the employer"""
    return await admin_client_service.get_client_bookings(client_id, limit, offset)


# --------------------------------------------------------------


@admin_client_router.get("/{client_id}/reviews", response_model=ClientReviewsResponse)
async def get_client_reviews(
    client_id: str,
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Reviews written by the employer"""
    return await admin_client_service.get_client_reviews(client_id, limit, offset)


# =====================================
# MODERATION ENDPOINTS
# =====================================


@admin_client_router.post("/{client_id}/warning", response_model=ActionResultResponse)
async def issue_warning(
    client_id: str,
    body: ClientWarningRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Issue a warning to the employer"""
    return await admin_client_service.issue_warning(client_id, body, admin, meta)


# --------------------------------------------------------------


@admin_client_router.post("/{client_id}/suspend", response_model=ActionResultResponse)
async def suspend_client(
    client_id: str,
    body: AccountActionRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Suspend or unsuspend the employer account"""
    return await admin_client_service.suspend_or_unsuspend(client_id, body, admin, meta)


# --------------------------------------------------------------


@admin_client_router.post("/{client_id}/ban", response_model=ActionResultResponse)
async def ban_client(
    client_id: str,
    body: AccountActionRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Ban or unban the employer account"""
    return await admin_client_service.ban_or_unban(client_id, body, admin, meta)


# --------------------------------------------------------------


@admin_client_router.patch("/{client_id}", response_model=ActionResultResponse)
async def update_client(
    client_id: str,
    body: AdminEmployerProfileUpdate,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_client_service: AdminClientService = Depends(get_admin_client_service),
):
    """Admin override of employer profile fields and notes"""
    return await admin_client_service.update_client(client_id, body, admin, meta)
