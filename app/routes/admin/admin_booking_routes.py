from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import AdminContext, require_admin, get_request_meta
from app.services.admin.admin_booking_services import AdminBookingService
from app.models.admin.admin_booking_models import BookingStatus, BookingResponse, BookingListResponse, BookingStatusUpdate
from app.models.admin.admin_action_models import RequestMeta, ActionResultResponse
from typing import Optional

admin_booking_router = APIRouter(prefix="/admin/bookings", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_admin_booking_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AdminBookingService:
    """Dependency to get AdminBookingService instance"""
    return AdminBookingService(supabase_client)


@admin_booking_router.get("", response_model=BookingListResponse)
async def get_bookings(
    status: Optional[BookingStatus] = Query(None, description="Booking status"),
    worker_id: Optional[str] = Query(None, description="Worker id"),
    employer_id: Optional[str] = Query(None, description="Employer id"),
    start_date: Optional[str] = Query(None, description="Bookings starting on or after (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Bookings starting on or before (YYYY-MM-DD)"),
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    admin_booking_service: AdminBookingService = Depends(get_admin_booking_service),
):
    """Bookings with worker and employer"""
    return await admin_booking_service.get_bookings(status, worker_id, employer_id, start_date, end_date, limit, offset)


# --------------------------------------------------------------


@admin_booking_router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: str, admin_booking_service: AdminBookingService = Depends(get_admin_booking_service)):
    """Booking detail"""
    return await admin_booking_service.get_booking(booking_id)


# --------------------------------------------------------------


@admin_booking_router.put("/{booking_id}", response_model=ActionResultResponse)
async def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdate,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_booking_service: AdminBookingService = Depends(get_admin_booking_service),
):
    """Change the booking status"""
    return await admin_booking_service.update_booking_status(booking_id, body, admin, meta)
