from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import AdminContext, require_admin, get_request_meta
from app.services.report_services import ReportService
from app.models.report_models import (
    ReportStatus,
    ReportPriority,
    ReportedType,
    AdminReportCreate,
    ReportResponse,
    ReportListResponse,
    ReportUpdateRequest,
    ReportStatsResponse,
)
from app.models.admin.admin_action_models import RequestMeta, ActionResultResponse
from typing import Optional

admin_report_router = APIRouter(prefix="/admin/reports", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_report_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> ReportService:
    """Dependency to get ReportService instance"""
    return ReportService(supabase_client)


@admin_report_router.get("", response_model=ReportListResponse)
async def get_reports(
    status: Optional[ReportStatus] = Query(None, description="Report status"),
    priority: Optional[ReportPriority] = Query(None, description="Priority"),
    category: Optional[str] = Query(None, description="Category"),
    reported_type: Optional[ReportedType] = Query(None, description="Kind of reported entity"),
    assigned_to: Optional[str] = Query(None, description="Assigned admin id"),
    reporter_id: Optional[str] = Query(None, description="Reporter id"),
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    report_service: ReportService = Depends(get_report_service),
):
    """Reports queue"""
    return await report_service.get_reports(
        status.value if status else None,
        priority.value if priority else None,
        category,
        reported_type.value if reported_type else None,
        assigned_to,
        reporter_id,
        limit,
        offset,
    )


# --------------------------------------------------------------


@admin_report_router.post("", response_model=ReportResponse)
async def create_report(report: AdminReportCreate, report_service: ReportService = Depends(get_report_service)):
    """File a report on behalf of a user"""
    return await report_service.create_report(report.reporter_id, report)


# --------------------------------------------------------------


@admin_report_router.get("/stats", response_model=ReportStatsResponse)
async def get_report_stats(report_service: ReportService = Depends(get_report_service)):
    """Report counts by status, category and priority"""
    return await report_service.get_report_stats()


# --------------------------------------------------------------


@admin_report_router.get("/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, report_service: ReportService = Depends(get_report_service)):
    """Report detail"""
    return await report_service.get_report(report_id)


# --------------------------------------------------------------


@admin_report_router.put("/{report_id}", response_model=ActionResultResponse)
async def update_report(
    report_id: str,
    body: ReportUpdateRequest,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    report_service: ReportService = Depends(get_report_service),
):
    """Assign, reprioritise, resolve or dismiss a report"""
    return await report_service.update_report(report_id, body, admin, meta)
