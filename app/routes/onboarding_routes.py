from fastapi import APIRouter, Depends, Request
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.user_auth import get_current_user_id
from app.utils.locale_utils import get_request_locale
from app.services.worker_onboarding_services import WorkerOnboardingService
from app.models.onboarding_models import (
    PersonalInfoStep,
    ServiceGalleryStep,
    PricingStep,
    PricingPreviewRequest,
    PricingPreviewResponse,
    OnboardingStateResponse,
    StepSubmitResponse,
)
from typing import Optional

onboarding_router = APIRouter(prefix="/workers/onboarding", tags=["Worker Onboarding"])


async def get_onboarding_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> WorkerOnboardingService:
    """Dependency to get WorkerOnboardingService instance"""
    return WorkerOnboardingService(supabase_client)


@onboarding_router.get("", response_model=OnboardingStateResponse)
async def get_onboarding_state(user_id: str = Depends(get_current_user_id), onboarding_service: WorkerOnboardingService = Depends(get_onboarding_service)):
    """Resume step and pre-filled forms of the wizard"""
    return await onboarding_service.get_onboarding_state(user_id)


# --------------------------------------------------------------


@onboarding_router.post("/step-1", response_model=StepSubmitResponse)
async def submit_personal_info(
    step_data: PersonalInfoStep,
    user_id: str = Depends(get_current_user_id),
    onboarding_service: WorkerOnboardingService = Depends(get_onboarding_service),
):
    """Save personal info"""
    return await onboarding_service.submit_personal_info(user_id, step_data)


# --------------------------------------------------------------


@onboarding_router.post("/step-2", response_model=StepSubmitResponse)
async def submit_service_gallery(
    step_data: ServiceGalleryStep,
    user_id: str = Depends(get_current_user_id),
    onboarding_service: WorkerOnboardingService = Depends(get_onboarding_service),
):
    """Save service selection and gallery"""
    return await onboarding_service.submit_service_gallery(user_id, step_data)


# --------------------------------------------------------------


@onboarding_router.post("/step-3", response_model=StepSubmitResponse)
async def submit_pricing(
    request: Request,
    step_data: PricingStep,
    locale: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    onboarding_service: WorkerOnboardingService = Depends(get_onboarding_service),
):
    """Save pricing and complete onboarding"""
    return await onboarding_service.submit_pricing(user_id, step_data, get_request_locale(request, locale))


# --------------------------------------------------------------


@onboarding_router.post("/preview-pricing", response_model=PricingPreviewResponse)
async def preview_pricing(preview_request: PricingPreviewRequest, user_id: str = Depends(get_current_user_id)):
    """Derived daily and monthly rates for the pricing form"""
    return WorkerOnboardingService.preview_pricing(preview_request)
