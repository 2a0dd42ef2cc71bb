from supabase import AsyncClient
from app.models.onboarding_models import (
    OnboardingStep,
    PersonalInfoStep,
    ServiceGalleryStep,
    PricingStep,
    PricingState,
    ServiceType,
    AssistanceCategory,
    OnboardingStateResponse,
    StepSubmitResponse,
    PricingPreviewRequest,
    PricingPreviewResponse,
    SETUP_STEP_COMPLETED,
    DEFAULT_MIN_BOOKING_HOURS,
    MIN_GALLERY_IMAGES,
    MAX_GALLERY_IMAGES,
    MAX_SERVICE_IMAGES,
    COMPANIONSHIP_LEVELS,
)
from app.models.user_models import UserRole
from app.services.pricing_services import parse_rate, build_service_pricing, derive_service_pricing, migrate_legacy_pricing
from app.services.email_services import EmailService
from app.custom_error import UserNotFoundError, ProfileNotFoundError, ForbiddenError, ValidationError, DatabaseError, ServerError
from app.utils.locale_utils import localized_path
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class OnboardingWizard:
    """
    3 step linear wizard: 1 personal info -> 2 service & gallery -> 3 pricing.

    current_step is what the worker is looking at; moving back is local only and never persisted.
    persisted_step mirrors worker_profiles.setup_step and only ever grows.
    """

    FIRST_STEP = OnboardingStep.PERSONAL_INFO.value
    LAST_STEP = OnboardingStep.PRICING.value

    def __init__(self, persisted_step: Optional[int] = None, setup_completed: bool = False):
        self.persisted_step = persisted_step or self.FIRST_STEP
        self.setup_completed = setup_completed

        # a finished profile re-enters at step 1 for editing
        if setup_completed:
            self.current_step = self.FIRST_STEP
        else:
            self.current_step = min(max(self.persisted_step, self.FIRST_STEP), self.LAST_STEP)

    @classmethod
    def resume(cls, profile: Optional[Dict[str, Any]]) -> "OnboardingWizard":
        if not profile:
            return cls()
        return cls(profile.get("setup_step"), bool(profile.get("setup_completed")))

    @property
    def unlocked_step(self) -> int:
        """Furthest step the worker may submit"""
        if self.setup_completed:
            return self.LAST_STEP
        return min(max(self.persisted_step, self.FIRST_STEP), self.LAST_STEP)

    def go_back(self) -> int:
        if self.current_step > self.FIRST_STEP:
            self.current_step -= 1
        return self.current_step

    def go_forward(self) -> int:
        if self.current_step >= self.unlocked_step:
            raise ValidationError(f"Please complete step {self.current_step} first")
        self.current_step += 1
        return self.current_step

    def ensure_can_submit(self, step: int) -> None:
        if step > self.unlocked_step:
            raise ValidationError(f"Please complete step {self.unlocked_step} first")

    def next_persisted_step(self, submitted_step: int) -> int:
        """setup_step to write after a successful submit; never lower than what is stored"""
        if submitted_step >= self.LAST_STEP:
            return SETUP_STEP_COMPLETED
        return max(self.persisted_step, submitted_step + 1)

    def complete_step(self, submitted_step: int) -> int:
        self.persisted_step = self.next_persisted_step(submitted_step)
        if submitted_step >= self.LAST_STEP:
            self.setup_completed = True
        else:
            self.current_step = submitted_step + 1
        return self.persisted_step

    # =====================================================================================================
    # Step validation (messages are shown inline by the client)
    # =====================================================================================================

    @staticmethod
    def validate_personal_info(data: PersonalInfoStep) -> int:
        """Return the parsed age"""
        if not data.full_name or not data.full_name.strip():
            raise ValidationError("Please enter your full name")

        age = parse_rate(data.age)
        if age is None or age <= 0 or not age.is_integer():
            raise ValidationError("Please enter a valid age")

        return int(age)

    @staticmethod
    def validate_service_gallery(data: ServiceGalleryStep) -> ServiceType:
        if len(data.gallery_images) < MIN_GALLERY_IMAGES:
            raise ValidationError(f"Please upload at least {MIN_GALLERY_IMAGES} gallery images")

        if len(data.gallery_images) > MAX_GALLERY_IMAGES:
            raise ValidationError(f"Maximum {MAX_GALLERY_IMAGES} gallery images allowed")

        try:
            service_type = ServiceType(data.service_type)
        except ValueError:
            raise ValidationError("Please select a service type")

        if service_type == ServiceType.ASSISTANCE and not data.service_categories:
            raise ValidationError("Please select at least one service category")

        if service_type == ServiceType.COMPANIONSHIP and data.service_level not in COMPANIONSHIP_LEVELS:
            raise ValidationError("Please select a service level")

        return service_type

    @staticmethod
    def validate_pricing(service_type: Optional[str], service_categories: List[str], data: PricingStep) -> None:
        if len(data.service_images) > MAX_SERVICE_IMAGES:
            raise ValidationError(f"Maximum {MAX_SERVICE_IMAGES} service images allowed")

        if service_type == ServiceType.ASSISTANCE.value and service_categories:
            for category in service_categories:
                pricing_input = data.service_pricing.get(category)
                rate = parse_rate(pricing_input.hourly_rate) if pricing_input else None
                if rate is None or rate <= 0:
                    raise ValidationError(f"Please enter pricing for {category.replace('_', ' ')}")

        elif service_type == ServiceType.COMPANIONSHIP.value:
            rate = parse_rate(data.hourly_rate)
            if rate is None or rate <= 0:
                raise ValidationError("Please enter a valid hourly rate")

        else:
            raise ValidationError("Please select a service type")


class WorkerOnboardingService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def _get_worker_user(self, user_id: str) -> Dict[str, Any]:
        """Helper method to load the users row and make sure it belongs to a worker"""
        try:
            result = await self.supabase_client.table("users").select("id, email, role, full_name").eq("id", user_id).limit(1).execute()

            if not result.data:
                raise UserNotFoundError()

            user = result.data[0]
            if user.get("role") != UserRole.WORKER.value:
                raise ForbiddenError("Only workers can access onboarding")

            return user

        except Exception as e:
            logger.error(f"Error getting worker user - {str(e)}")
            if isinstance(e, (UserNotFoundError, ForbiddenError)):
                raise e
            raise ServerError("Failed to get user")

    async def _get_worker_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = await self.supabase_client.table("worker_profiles").select("*").eq("id", user_id).limit(1).execute()
            return result.data[0] if result.data else None

        except Exception as e:
            logger.error(f"Error getting worker profile - {str(e)}")
            raise ServerError("Failed to get worker profile")

    async def _update_worker_profile(self, user_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.supabase_client.table("worker_profiles").update(update_data).eq("id", user_id).execute()

        if not result.data:
            raise ProfileNotFoundError("Worker profile not found")

        return result.data[0]

    # =====================================================================================================
    # CORE OPERATIONS
    # =====================================================================================================

    async def get_onboarding_state(self, user_id: str) -> OnboardingStateResponse:
        """Resume point plus pre-filled forms for the wizard"""
        try:
            user = await self._get_worker_user(user_id)
            profile = await self._get_worker_profile(user_id) or {}
            wizard = OnboardingWizard.resume(profile)

            # old rows only have the single service_category column
            service_categories = profile.get("service_categories") or ([profile["service_category"]] if profile.get("service_category") else [])

            return OnboardingStateResponse(
                current_step=wizard.current_step,
                setup_completed=wizard.setup_completed,
                personal_info=PersonalInfoStep(
                    full_name=user.get("full_name") or "",
                    age=profile.get("age"),
                    height=profile.get("height"),
                    weight=profile.get("weight"),
                    zodiac_sign=profile.get("zodiac_sign"),
                    hobbies=profile.get("hobbies") or [],
                    lifestyle=profile.get("lifestyle"),
                    favorite_quote=profile.get("favorite_quote"),
                    introduction=profile.get("introduction"),
                    skills=profile.get("skills") or [],
                    experience=profile.get("bio"),
                    available=profile.get("available", True) is not False,
                ),
                service_gallery=ServiceGalleryStep(
                    gallery_images=profile.get("gallery_images") or [],
                    service_type=profile.get("service_type"),
                    service_categories=[c for c in service_categories if c in AssistanceCategory._value2member_map_],
                    service_level=profile.get("service_level"),
                    service_languages=profile.get("service_languages") or [],
                ),
                pricing=PricingState(
                    currency=profile.get("currency") or "USD",
                    service_pricing=migrate_legacy_pricing(profile),
                    service_images=profile.get("service_images") or [],
                    hourly_rate=parse_rate(profile.get("hourly_rate")),
                    min_booking_hours=profile.get("min_booking_hours") or DEFAULT_MIN_BOOKING_HOURS,
                ),
            )

        except Exception as e:
            logger.error(f"Error in get_onboarding_state: {str(e)}")
            if isinstance(e, (UserNotFoundError, ForbiddenError, ServerError)):
                raise e
            raise ServerError(f"Server operation failed: {str(e)}")

    # -------------------------------------------------------------------------------------------------------------------------------

    async def submit_personal_info(self, user_id: str, data: PersonalInfoStep) -> StepSubmitResponse:
        """Step 1: users.full_name and the personal fields of worker_profiles"""
        age = OnboardingWizard.validate_personal_info(data)

        try:
            user = await self._get_worker_user(user_id)
            profile = await self._get_worker_profile(user_id)
            wizard = OnboardingWizard.resume(profile)
            wizard.ensure_can_submit(OnboardingStep.PERSONAL_INFO.value)

            profile_record = {
                "age": age,
                "height": data.height or None,
                "weight": data.weight or None,
                "zodiac_sign": data.zodiac_sign.value if data.zodiac_sign else None,
                "hobbies": data.hobbies,
                "lifestyle": data.lifestyle or None,
                "favorite_quote": data.favorite_quote or None,
                "introduction": data.introduction or None,
                "skills": data.skills,
                "bio": data.experience or None,
                "available": data.available,
                "setup_step": wizard.next_persisted_step(OnboardingStep.PERSONAL_INFO.value),
            }

            previous_full_name = user.get("full_name")
            user_result = await self.supabase_client.table("users").update({"full_name": data.full_name.strip()}).eq("id", user_id).execute()
            if not user_result.data:
                raise DatabaseError("Failed to save profile information")

            # users and worker_profiles are two separate writes; if the second fails we put the old name back
            # so the worker does not end up with half of step 1 saved
            try:
                if profile:
                    await self._update_worker_profile(user_id, profile_record)
                else:
                    profile_record["id"] = user_id
                    insert_result = await self.supabase_client.table("worker_profiles").insert(profile_record).execute()
                    if not insert_result.data:
                        raise DatabaseError("Failed to create worker profile")

            except Exception as profile_error:
                logger.error(f"Step 1 profile write failed for {user_id}, reverting full_name - {str(profile_error)}")
                await self._revert_full_name(user_id, previous_full_name)
                raise DatabaseError(f"Failed to save profile information: {str(profile_error)}")

            wizard.complete_step(OnboardingStep.PERSONAL_INFO.value)
            logger.info(f"✅ Onboarding step 1 saved for worker {user_id}")

            return StepSubmitResponse(success=True, current_step=wizard.current_step, setup_completed=wizard.setup_completed)

        except Exception as e:
            logger.error(f"Error in submit_personal_info: {str(e)}")
            if isinstance(e, (UserNotFoundError, ForbiddenError, ValidationError, DatabaseError, ServerError)):
                raise e
            raise DatabaseError(f"Failed to save profile information: {str(e)}")

    async def _revert_full_name(self, user_id: str, previous_full_name: Optional[str]) -> None:
        try:
            await self.supabase_client.table("users").update({"full_name": previous_full_name}).eq("id", user_id).execute()
        except Exception as e:
            # both writes are now out of sync, nothing more we can do here besides making it visible
            logger.error(f"❌ Could not revert full_name for {user_id} - {str(e)}")

    # -------------------------------------------------------------------------------------------------------------------------------

    async def submit_service_gallery(self, user_id: str, data: ServiceGalleryStep) -> StepSubmitResponse:
        """Step 2: gallery plus exactly one of the two service branches"""
        service_type = OnboardingWizard.validate_service_gallery(data)

        try:
            await self._get_worker_user(user_id)
            profile = await self._get_worker_profile(user_id)
            if not profile:
                raise ProfileNotFoundError("Worker profile not found")

            wizard = OnboardingWizard.resume(profile)
            wizard.ensure_can_submit(OnboardingStep.SERVICE_AND_GALLERY.value)

            # switching service type wipes the branch that is no longer selected
            service_categories = [c.value for c in data.service_categories] if service_type == ServiceType.ASSISTANCE else []
            service_level = data.service_level if service_type == ServiceType.COMPANIONSHIP else None
            service_languages = data.service_languages if AssistanceCategory.TRANSLATOR.value in service_categories else []

            await self._update_worker_profile(
                user_id,
                {
                    "gallery_images": data.gallery_images,
                    "service_type": service_type.value,
                    "service_categories": service_categories,
                    "service_level": service_level,
                    "service_languages": service_languages,
                    "setup_step": wizard.next_persisted_step(OnboardingStep.SERVICE_AND_GALLERY.value),
                },
            )

            wizard.complete_step(OnboardingStep.SERVICE_AND_GALLERY.value)
            logger.info(f"✅ Onboarding step 2 saved for worker {user_id} ({service_type.value})")

            return StepSubmitResponse(success=True, current_step=wizard.current_step, setup_completed=wizard.setup_completed)

        except Exception as e:
            logger.error(f"Error in submit_service_gallery: {str(e)}")
            if isinstance(e, (UserNotFoundError, ProfileNotFoundError, ForbiddenError, ValidationError, ServerError)):
                raise e
            raise DatabaseError(f"Failed to save service information: {str(e)}")

    # -------------------------------------------------------------------------------------------------------------------------------

    async def submit_pricing(self, user_id: str, data: PricingStep, locale: str) -> StepSubmitResponse:
        """Step 3: per service pricing, marks the setup as completed"""
        try:
            user = await self._get_worker_user(user_id)
            profile = await self._get_worker_profile(user_id)
            if not profile:
                raise ProfileNotFoundError("Worker profile not found")

            wizard = OnboardingWizard.resume(profile)
            wizard.ensure_can_submit(OnboardingStep.PRICING.value)

            # the service branch comes from what step 2 stored, not from the client
            service_type = profile.get("service_type")
            service_categories = profile.get("service_categories") or []
            OnboardingWizard.validate_pricing(service_type, service_categories, data)

            service_pricing_json = {}
            legacy_pricing = None
            if service_type == ServiceType.ASSISTANCE.value:
                derived = derive_service_pricing({c: data.service_pricing[c] for c in service_categories if c in data.service_pricing})
                service_pricing_json = {category: pricing.model_dump() for category, pricing in derived.items()}
                # old columns mirror the first selected service
                legacy_pricing = derived.get(service_categories[0])
            else:
                legacy_pricing = build_service_pricing(data.hourly_rate, data.min_booking_hours)

            await self._update_worker_profile(
                user_id,
                {
                    "currency": data.currency.value,
                    "service_pricing": service_pricing_json,
                    "hourly_rate": legacy_pricing.hourly_rate if legacy_pricing else None,
                    "daily_rate": legacy_pricing.daily_rate if legacy_pricing else None,
                    "monthly_rate": legacy_pricing.monthly_rate if legacy_pricing else None,
                    "min_booking_hours": legacy_pricing.min_booking_hours if legacy_pricing else data.min_booking_hours,
                    "service_images": data.service_images,
                    "setup_step": wizard.next_persisted_step(OnboardingStep.PRICING.value),
                    "setup_completed": True,
                },
            )

            first_completion = not wizard.setup_completed
            wizard.complete_step(OnboardingStep.PRICING.value)
            logger.info(f"✅ Onboarding completed for worker {user_id}")

            if first_completion:
                EmailService.send_worker_onboarding_notification(
                    worker_id=user_id,
                    full_name=user.get("full_name"),
                    email=user.get("email"),
                    service_type=service_type,
                )

            return StepSubmitResponse(
                success=True,
                current_step=wizard.persisted_step,
                setup_completed=True,
                redirect_to=localized_path(locale, "/profile/worker"),
            )

        except Exception as e:
            logger.error(f"Error in submit_pricing: {str(e)}")
            if isinstance(e, (UserNotFoundError, ProfileNotFoundError, ForbiddenError, ValidationError, ServerError)):
                raise e
            raise DatabaseError(f"Failed to save pricing information: {str(e)}")

    # -------------------------------------------------------------------------------------------------------------------------------

    @staticmethod
    def preview_pricing(request: PricingPreviewRequest) -> PricingPreviewResponse:
        """Live preview of daily/monthly rates while the worker types"""
        return PricingPreviewResponse(service_pricing=derive_service_pricing(request.service_pricing))
