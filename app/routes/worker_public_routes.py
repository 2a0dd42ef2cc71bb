from fastapi import APIRouter, Depends, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.services.profile_services import ProfileService
from app.services.review_services import ReviewService
from app.services.availability_services import AvailabilityService
from app.models.worker_profile_models import WorkerProfileWithUser
from app.models.review_models import WorkerReviewsResponse, MonthAvailabilityResponse

worker_public_router = APIRouter(prefix="/workers", tags=["Workers"])


async def get_profile_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> ProfileService:
    """Dependency to get ProfileService instance"""
    return ProfileService(supabase_client)


async def get_review_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> ReviewService:
    """Dependency to get ReviewService instance"""
    return ReviewService(supabase_client)


async def get_availability_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AvailabilityService:
    """Dependency to get AvailabilityService instance"""
    return AvailabilityService(supabase_client)


@worker_public_router.get("/{worker_id}", response_model=WorkerProfileWithUser)
async def get_worker(worker_id: str, profile_service: ProfileService = Depends(get_profile_service)):
    """Public worker detail"""
    return await profile_service.get_public_worker_profile(worker_id)


# --------------------------------------------------------------


@worker_public_router.get("/{worker_id}/reviews", response_model=WorkerReviewsResponse)
async def get_worker_reviews(
    worker_id: str,
    limit: int = Query(10, ge=1, le=100, description="Number of reviews"),
    review_service: ReviewService = Depends(get_review_service),
):
    """Latest reviews with rating distribution"""
    return await review_service.get_worker_reviews(worker_id, limit)


# --------------------------------------------------------------


@worker_public_router.get("/{worker_id}/availability", response_model=MonthAvailabilityResponse)
async def get_worker_availability(
    worker_id: str,
    year: int = Query(..., ge=2000, le=2100, description="Calendar year"),
    month: int = Query(..., ge=1, le=12, description="Calendar month (1-12)"),
    availability_service: AvailabilityService = Depends(get_availability_service),
):
    """Month grid of booked and available days"""
    return await availability_service.get_month_availability(worker_id, year, month)
