from pydantic import BaseModel
from typing import List, Optional, Dict
from datetime import datetime


class ReviewResponse(BaseModel):
    id: str
    booking_id: Optional[str] = None
    worker_id: str
    employer_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    images: Optional[List[str]] = None
    helpful_count: int = 0
    is_verified_purchase: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employer_name: Optional[str] = None
    employer_avatar: Optional[str] = None
    worker_response: Optional[str] = None
    response_created_at: Optional[datetime] = None


class WorkerReviewsResponse(BaseModel):
    reviews: List[ReviewResponse]
    # keys "1".."5"
    rating_distribution: Dict[str, int]
    average_rating: float
    total_reviews: int


# -------------------------------------------------------------------------------------------
# Availability calendar
# -------------------------------------------------------------------------------------------


class DayAvailability(BaseModel):
    date: str  # YYYY-MM-DD
    is_available: bool
    is_booked: bool
    booking_ids: List[str] = []


class MonthAvailabilityResponse(BaseModel):
    worker_id: str
    year: int
    month: int
    # 0 = Sunday, the grid starts on Sunday
    starting_day_of_week: int
    days: List[DayAvailability]
