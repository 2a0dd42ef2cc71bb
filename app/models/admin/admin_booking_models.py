from pydantic import BaseModel
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum
from app.models.admin.admin_worker_models import AdminIdentity


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# bookings in these states block the worker's calendar
ACTIVE_BOOKING_STATUSES = [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value, BookingStatus.IN_PROGRESS.value]


class BookingResponse(BaseModel):
    id: str
    worker_id: str
    employer_id: str
    service_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total_hours: Optional[float] = None
    hourly_rate: Optional[float] = None
    total_amount: Optional[float] = None
    currency: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    worker: Optional[Dict[str, Any]] = None
    employer: Optional[Dict[str, Any]] = None


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int
    limit: int
    offset: int


class BookingStatusUpdate(AdminIdentity):
    status: Optional[BookingStatus] = None
