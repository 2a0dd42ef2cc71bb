from fastapi import APIRouter, Depends
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.user_auth import get_current_session_user
from app.services.report_services import ReportService
from app.models.report_models import ReportCreate, ReportResponse
from app.models.user_models import SessionUser

report_router = APIRouter(prefix="/reports", tags=["Reports"])


async def get_report_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> ReportService:
    """Dependency to get ReportService instance"""
    return ReportService(supabase_client)


@report_router.post("", response_model=ReportResponse)
async def create_report(
    report: ReportCreate,
    session_user: SessionUser = Depends(get_current_session_user),
    report_service: ReportService = Depends(get_report_service),
):
    """File a report against a user, profile, booking or review"""
    return await report_service.create_report(session_user.id, report)
