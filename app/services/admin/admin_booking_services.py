from app.models.admin.admin_booking_models import BookingStatus, BookingResponse, BookingListResponse, BookingStatusUpdate
from app.models.admin.admin_action_models import AdminActionType, AdminTargetType, RequestMeta, ActionResultResponse
from app.services.admin.admin_action_services import AuditedAdminService
from app.utils.admin_auth import AdminContext
from app.utils.query_helpers import utc_now_iso
from app.custom_error import NotFoundError, ValidationError, DatabaseError, ServerError
from typing import Optional
import logging

logger = logging.getLogger(__name__)

BOOKING_SELECT = "*, worker:users!worker_id(id, email, full_name, avatar_url), employer:users!employer_id(id, email, full_name, avatar_url)"


class AdminBookingService(AuditedAdminService):
    async def get_bookings(
        self,
        status: Optional[BookingStatus] = None,
        worker_id: Optional[str] = None,
        employer_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> BookingListResponse:
        """Bookings with both parties, newest first; the date range applies to start_date"""
        try:
            query = self.supabase_client.table("bookings").select(BOOKING_SELECT, count="exact")

            if status:
                query = query.eq("status", status.value)
            if worker_id:
                query = query.eq("worker_id", worker_id)
            if employer_id:
                query = query.eq("employer_id", employer_id)
            if start_date:
                query = query.gte("start_date", start_date)
            if end_date:
                query = query.lte("start_date", end_date)

            result = await query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()

            return BookingListResponse(
                bookings=[BookingResponse(**row) for row in result.data or []],
                total=result.count or 0,
                limit=limit,
                offset=offset,
            )

        except Exception as e:
            logger.error(f"Error fetching bookings: {str(e)}")
            raise ServerError(f"Failed to fetch bookings: {str(e)}")

    # --------------------------------------------------------------

    async def get_booking(self, booking_id: str) -> BookingResponse:
        try:
            result = await self.supabase_client.table("bookings").select(BOOKING_SELECT).eq("id", booking_id).limit(1).execute()

            if not result.data:
                raise NotFoundError("Booking not found")

            return BookingResponse(**result.data[0])

        except Exception as e:
            logger.error(f"Error fetching booking {booking_id}: {str(e)}")
            if isinstance(e, NotFoundError):
                raise e
            raise ServerError(f"Failed to fetch booking: {str(e)}")

    # --------------------------------------------------------------

    async def update_booking_status(self, booking_id: str, body: BookingStatusUpdate, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        if not body.status:
            raise ValidationError("Status is required")

        try:
            result = (
                await self.supabase_client.table("bookings")
                .update({"status": body.status.value, "updated_at": utc_now_iso()})
                .eq("id", booking_id)
                .execute()
            )

            if not result.data:
                raise NotFoundError("Booking not found")

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=AdminActionType.UPDATE_BOOKING_STATUS,
                target_type=AdminTargetType.BOOKING,
                target_id=booking_id,
                target_name=f"Booking {booking_id[:8]}",
                changes={"status": body.status.value},
            )

            logger.info(f"✅ Booking {booking_id} moved to {body.status.value}")
            return ActionResultResponse(success=True, message="Booking status updated successfully")

        except Exception as e:
            logger.error(f"Error updating booking {booking_id}: {str(e)}")
            if isinstance(e, NotFoundError):
                raise e
            raise DatabaseError(f"Failed to update booking status: {str(e)}")
