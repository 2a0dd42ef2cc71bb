from supabase import AsyncClient
from app.models.review_models import DayAvailability, MonthAvailabilityResponse
from app.models.admin.admin_booking_models import ACTIVE_BOOKING_STATUSES
from app.custom_error import ProfileNotFoundError, ValidationError, ServerError
from datetime import date, timedelta
import calendar
import logging

logger = logging.getLogger(__name__)


class AvailabilityService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def get_month_availability(self, worker_id: str, year: int, month: int) -> MonthAvailabilityResponse:
        """
        Month grid for the worker calendar.
        A day is booked when a pending, confirmed or in progress booking covers it (start and end dates inclusive).
        A day is available when the worker takes bookings and the day is not booked.
        """
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")

        first_day = date(year, month, 1)
        last_day = date(year, month, calendar.monthrange(year, month)[1])

        try:
            profile_result = await self.supabase_client.table("worker_profiles").select("id, available").eq("id", worker_id).limit(1).execute()

            if not profile_result.data:
                raise ProfileNotFoundError("Worker profile not found")

            worker_available = profile_result.data[0].get("available") is not False

            bookings_result = (
                await self.supabase_client.table("bookings")
                .select("id, start_date, end_date, status")
                .eq("worker_id", worker_id)
                .in_("status", list(ACTIVE_BOOKING_STATUSES))
                .lte("start_date", last_day.isoformat())
                .gte("end_date", first_day.isoformat())
                .execute()
            )

            booked: dict = {}
            for booking in bookings_result.data or []:
                start = date.fromisoformat((booking.get("start_date") or "")[:10])
                end = date.fromisoformat((booking.get("end_date") or booking["start_date"])[:10])
                day = max(start, first_day)
                while day <= min(end, last_day):
                    booked.setdefault(day, []).append(booking["id"])
                    day += timedelta(days=1)

            days = []
            day = first_day
            while day <= last_day:
                booking_ids = booked.get(day, [])
                days.append(
                    DayAvailability(date=day.isoformat(), is_available=worker_available and not booking_ids, is_booked=bool(booking_ids), booking_ids=booking_ids)
                )
                day += timedelta(days=1)

            return MonthAvailabilityResponse(
                worker_id=worker_id,
                year=year,
                month=month,
                # date.weekday() counts from Monday, the grid starts on Sunday
                starting_day_of_week=(first_day.weekday() + 1) % 7,
                days=days,
            )

        except Exception as e:
            logger.error(f"Error building availability of worker {worker_id} for {year}-{month}: {str(e)}")
            if isinstance(e, ProfileNotFoundError):
                raise e
            raise ServerError(f"Failed to fetch availability: {str(e)}")
