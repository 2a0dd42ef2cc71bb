from pydantic import BaseModel
from typing import List
from enum import Enum


class StatsType(str, Enum):
    DASHBOARD = "dashboard"
    GROWTH = "growth"
    REVENUE = "revenue"


class UserStats(BaseModel):
    total: int = 0
    workers: int = 0
    employers: int = 0
    admins: int = 0
    active: int = 0
    suspended: int = 0
    banned: int = 0


class WorkerStats(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    active: int = 0
    suspended: int = 0
    verified: int = 0


class EmployerStats(BaseModel):
    total: int = 0
    active: int = 0
    verified: int = 0


class BookingStats(BaseModel):
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    completed: int = 0
    cancelled: int = 0
    total_revenue: float = 0.0


class ReviewStats(BaseModel):
    total: int = 0
    average_rating: float = 0.0
    hidden: int = 0


class ReportCounts(BaseModel):
    total: int = 0
    pending: int = 0
    investigating: int = 0
    resolved: int = 0
    dismissed: int = 0


class RecentActivity(BaseModel):
    new_workers_today: int = 0
    new_employers_today: int = 0
    new_bookings_today: int = 0
    new_reports_today: int = 0


class DashboardStats(BaseModel):
    users: UserStats
    workers: WorkerStats
    employers: EmployerStats
    bookings: BookingStats
    reviews: ReviewStats
    reports: ReportCounts
    recent_activity: RecentActivity


class GrowthStats(BaseModel):
    labels: List[str]
    workers: List[int]
    employers: List[int]


class RevenueStats(BaseModel):
    labels: List[str]
    revenue: List[float]
    total_revenue: float
    average_booking_value: float
