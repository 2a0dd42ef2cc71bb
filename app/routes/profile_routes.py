from fastapi import APIRouter, Depends
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.user_auth import get_current_user_id
from app.services.profile_services import ProfileService
from app.models.worker_profile_models import WorkerProfileWithUser, WorkerProfileUpdate, ProfileCompletionResponse
from app.models.employer_profile_models import EmployerProfileWithUser, EmployerProfileUpdate

profile_router = APIRouter(prefix="/profile", tags=["Profiles"])


async def get_profile_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> ProfileService:
    """Dependency to get ProfileService instance"""
    return ProfileService(supabase_client)


@profile_router.get("/worker", response_model=WorkerProfileWithUser)
async def get_worker_profile(user_id: str = Depends(get_current_user_id), profile_service: ProfileService = Depends(get_profile_service)):
    """Own worker profile"""
    return await profile_service.get_worker_profile(user_id)


@profile_router.put("/worker", response_model=WorkerProfileWithUser)
async def update_worker_profile(
    profile_update: WorkerProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Edit own worker profile"""
    return await profile_service.update_worker_profile(user_id, profile_update)


# --------------------------------------------------------------


@profile_router.get("/employer", response_model=EmployerProfileWithUser)
async def get_employer_profile(user_id: str = Depends(get_current_user_id), profile_service: ProfileService = Depends(get_profile_service)):
    """Own employer profile"""
    return await profile_service.get_employer_profile(user_id)


@profile_router.put("/employer", response_model=EmployerProfileWithUser)
async def update_employer_profile(
    profile_update: EmployerProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Edit own employer profile"""
    return await profile_service.update_employer_profile(user_id, profile_update)


# --------------------------------------------------------------


@profile_router.get("/completion", response_model=ProfileCompletionResponse)
async def get_profile_completion(user_id: str = Depends(get_current_user_id), profile_service: ProfileService = Depends(get_profile_service)):
    """Share of filled profile fields"""
    return await profile_service.get_profile_completion(user_id)
