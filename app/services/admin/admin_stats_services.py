from supabase import AsyncClient
from app.models.admin.admin_stats_models import (
    DashboardStats,
    UserStats,
    WorkerStats,
    EmployerStats,
    BookingStats,
    ReviewStats,
    ReportCounts,
    RecentActivity,
    GrowthStats,
    RevenueStats,
)
from app.models.admin.admin_booking_models import BookingStatus
from app.models.user_models import UserRole
from app.custom_error import ServerError
from datetime import datetime, timedelta, timezone
from typing import List, Dict, Any
import asyncio
import logging

logger = logging.getLogger(__name__)


def _count(rows: List[Dict[str, Any]], column: str, value: Any) -> int:
    return sum(1 for row in rows if row.get(column) == value)


def _daily_buckets(days: int) -> tuple:
    """(start datetime, {YYYY-MM-DD: 0 for each of the last `days` days, today included})"""
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    start = today - timedelta(days=days - 1)
    buckets = {}
    for offset in range(days):
        buckets[(start + timedelta(days=offset)).date().isoformat()] = 0
    return start, buckets


class AdminStatsService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    # =====================================
    # DASHBOARD
    # =====================================

    async def get_dashboard_stats(self) -> DashboardStats:
        """All dashboard counters; the eight reads are independent so they run concurrently"""
        try:
            today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0).isoformat()

            (
                users_result,
                workers_today_result,
                employers_today_result,
                worker_profiles_result,
                employer_profiles_result,
                bookings_result,
                reviews_result,
                reports_result,
            ) = await asyncio.gather(
                self.supabase_client.table("users").select("role, account_status, created_at").execute(),
                self.supabase_client.table("users").select("id, created_at").eq("role", UserRole.WORKER.value).gte("created_at", today).execute(),
                self.supabase_client.table("users").select("id, created_at").eq("role", UserRole.EMPLOYER.value).gte("created_at", today).execute(),
                self.supabase_client.table("worker_profiles").select("approval_status, profile_status, is_verified").execute(),
                self.supabase_client.table("employer_profiles").select("is_verified").execute(),
                self.supabase_client.table("bookings").select("status, total_amount, currency, created_at").execute(),
                self.supabase_client.table("reviews").select("rating, is_hidden").execute(),
                self.supabase_client.table("reports").select("status, created_at").execute(),
            )

            users = users_result.data or []
            user_stats = UserStats(
                total=len(users),
                workers=_count(users, "role", UserRole.WORKER.value),
                employers=_count(users, "role", UserRole.EMPLOYER.value),
                admins=_count(users, "role", UserRole.ADMIN.value),
                active=_count(users, "account_status", "active"),
                suspended=_count(users, "account_status", "suspended"),
                banned=_count(users, "account_status", "banned"),
            )

            worker_profiles = worker_profiles_result.data or []
            worker_stats = WorkerStats(
                total=len(worker_profiles),
                pending=_count(worker_profiles, "approval_status", "pending"),
                approved=_count(worker_profiles, "approval_status", "approved"),
                rejected=_count(worker_profiles, "approval_status", "rejected"),
                active=_count(worker_profiles, "profile_status", "active"),
                suspended=_count(worker_profiles, "profile_status", "suspended"),
                verified=sum(1 for row in worker_profiles if row.get("is_verified")),
            )

            employer_profiles = employer_profiles_result.data or []
            employer_stats = EmployerStats(
                total=len(employer_profiles),
                active=sum(1 for row in users if row.get("role") == UserRole.EMPLOYER.value and row.get("account_status") == "active"),
                verified=sum(1 for row in employer_profiles if row.get("is_verified")),
            )

            bookings = bookings_result.data or []
            booking_stats = BookingStats(
                total=len(bookings),
                pending=_count(bookings, "status", BookingStatus.PENDING.value),
                confirmed=_count(bookings, "status", BookingStatus.CONFIRMED.value),
                completed=_count(bookings, "status", BookingStatus.COMPLETED.value),
                cancelled=_count(bookings, "status", BookingStatus.CANCELLED.value),
                total_revenue=round(
                    sum(float(row.get("total_amount") or 0) for row in bookings if row.get("status") == BookingStatus.COMPLETED.value), 2
                ),
            )

            reviews = reviews_result.data or []
            review_stats = ReviewStats(
                total=len(reviews),
                average_rating=round(sum(row.get("rating") or 0 for row in reviews) / len(reviews), 2) if reviews else 0.0,
                hidden=sum(1 for row in reviews if row.get("is_hidden")),
            )

            reports = reports_result.data or []
            report_stats = ReportCounts(
                total=len(reports),
                pending=_count(reports, "status", "pending"),
                investigating=_count(reports, "status", "investigating"),
                resolved=_count(reports, "status", "resolved"),
                dismissed=_count(reports, "status", "dismissed"),
            )

            recent_activity = RecentActivity(
                new_workers_today=len(workers_today_result.data or []),
                new_employers_today=len(employers_today_result.data or []),
                new_bookings_today=sum(1 for row in bookings if (row.get("created_at") or "") >= today),
                new_reports_today=sum(1 for row in reports if (row.get("created_at") or "") >= today),
            )

            return DashboardStats(
                users=user_stats,
                workers=worker_stats,
                employers=employer_stats,
                bookings=booking_stats,
                reviews=review_stats,
                reports=report_stats,
                recent_activity=recent_activity,
            )

        except Exception as e:
            logger.error(f"Error fetching dashboard stats: {str(e)}")
            raise ServerError(f"Failed to fetch dashboard statistics: {str(e)}")

    # =====================================
    # TIME SERIES
    # =====================================

    async def get_growth_stats(self, days: int = 30) -> GrowthStats:
        """New workers and employers per day"""
        try:
            start, worker_buckets = _daily_buckets(days)
            employer_buckets = dict(worker_buckets)

            result = (
                await self.supabase_client.table("users")
                .select("role, created_at")
                .gte("created_at", start.isoformat())
                .order("created_at", desc=False)
                .execute()
            )

            for user in result.data or []:
                day = (user.get("created_at") or "")[:10]
                if day not in worker_buckets:
                    continue
                if user.get("role") == UserRole.WORKER.value:
                    worker_buckets[day] += 1
                elif user.get("role") == UserRole.EMPLOYER.value:
                    employer_buckets[day] += 1

            labels = sorted(worker_buckets.keys())
            return GrowthStats(
                labels=labels,
                workers=[worker_buckets[day] for day in labels],
                employers=[employer_buckets[day] for day in labels],
            )

        except Exception as e:
            logger.error(f"Error fetching growth stats: {str(e)}")
            raise ServerError(f"Failed to fetch user growth stats: {str(e)}")

    # --------------------------------------------------------------

    async def get_revenue_stats(self, days: int = 30) -> RevenueStats:
        """Completed booking revenue per day"""
        try:
            start, revenue_buckets = _daily_buckets(days)

            result = (
                await self.supabase_client.table("bookings")
                .select("total_amount, created_at, status")
                .gte("created_at", start.isoformat())
                .eq("status", BookingStatus.COMPLETED.value)
                .order("created_at", desc=False)
                .execute()
            )

            bookings = result.data or []
            total_revenue = 0.0
            for booking in bookings:
                amount = float(booking.get("total_amount") or 0)
                day = (booking.get("created_at") or "")[:10]
                if day in revenue_buckets:
                    revenue_buckets[day] += amount
                total_revenue += amount

            labels = sorted(revenue_buckets.keys())
            return RevenueStats(
                labels=labels,
                revenue=[round(revenue_buckets[day], 2) for day in labels],
                total_revenue=round(total_revenue, 2),
                average_booking_value=round(total_revenue / len(bookings), 2) if bookings else 0.0,
            )

        except Exception as e:
            logger.error(f"Error fetching revenue stats: {str(e)}")
            raise ServerError(f"Failed to fetch revenue stats: {str(e)}")
