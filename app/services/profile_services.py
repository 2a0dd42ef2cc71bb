from supabase import AsyncClient
from app.models.worker_profile_models import WorkerProfileWithUser, WorkerProfileUpdate, ProfileCompletionResponse
from app.models.employer_profile_models import EmployerProfileWithUser, EmployerProfileUpdate
from app.models.onboarding_models import AssistanceCategory, ServiceType, PricingStep
from app.models.user_models import UserRole
from app.services.pricing_services import derive_service_pricing
from app.services.worker_onboarding_services import OnboardingWizard
from app.utils.query_helpers import utc_now_iso
from app.custom_error import UserNotFoundError, ProfileNotFoundError, ValidationError, DatabaseError, ServerError
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

# columns that live on users rather than on the profile tables
USER_FIELDS = ("full_name", "phone")


def calculate_profile_completion(profile: Dict[str, Any], role: str) -> int:
    """Percentage of filled profile fields, required and optional fields weigh the same"""
    if role == UserRole.WORKER.value:
        fields = [
            profile.get("bio"),
            profile.get("skills"),
            profile.get("city"),
            profile.get("hourly_rate"),
            profile.get("experience_years") is not None,
            profile.get("address"),
            profile.get("portfolio_images"),
            profile.get("certifications"),
        ]
    else:
        fields = [
            profile.get("company_name"),
            profile.get("company_description"),
            profile.get("industry"),
            profile.get("city"),
            profile.get("address"),
            profile.get("company_phone"),
            profile.get("company_email"),
            profile.get("website_url"),
        ]

    completed = sum(1 for field in fields if field)
    return round(completed / len(fields) * 100)


class ProfileService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def _get_user_role(self, user_id: str) -> str:
        try:
            result = await self.supabase_client.table("users").select("role").eq("id", user_id).limit(1).execute()

            if not result.data:
                raise UserNotFoundError()

            return result.data[0]["role"]

        except Exception as e:
            logger.error(f"Error getting role of user {user_id} - {str(e)}")
            if isinstance(e, UserNotFoundError):
                raise e
            raise ServerError("Failed to get user role")

    async def _get_profile_with_user(self, view: str, user_id: str, not_found_message: str) -> Dict[str, Any]:
        """Read one row of a *_with_user view (profile columns joined with the users columns)"""
        try:
            result = await self.supabase_client.table(view).select("*").eq("id", user_id).limit(1).execute()

            if not result.data:
                raise ProfileNotFoundError(not_found_message)

            return result.data[0]

        except Exception as e:
            logger.error(f"Error fetching {view} for {user_id} - {str(e)}")
            if isinstance(e, ProfileNotFoundError):
                raise e
            raise DatabaseError(f"Failed to fetch profile: {str(e)}")

    async def _update_profile(self, table: str, user_id: str, changes: Dict[str, Any], not_found_message: str) -> None:
        """Write users columns and profile columns of one partial edit, restoring the users columns when the profile write fails"""
        user_changes = {key: changes.pop(key) for key in USER_FIELDS if key in changes}

        if not user_changes and not changes:
            raise ValidationError("No fields to update")

        previous_user_values = None

        try:
            now = utc_now_iso()

            if user_changes:
                previous = await self.supabase_client.table("users").select(", ".join(user_changes)).eq("id", user_id).limit(1).execute()
                if not previous.data:
                    raise UserNotFoundError()
                previous_user_values = {key: previous.data[0].get(key) for key in user_changes}

                user_result = await self.supabase_client.table("users").update({**user_changes, "updated_at": now}).eq("id", user_id).execute()
                if not user_result.data:
                    raise UserNotFoundError()

            if changes:
                try:
                    result = await self.supabase_client.table(table).update({**changes, "updated_at": now}).eq("id", user_id).execute()
                    if not result.data:
                        raise ProfileNotFoundError(not_found_message)
                except Exception:
                    if previous_user_values is not None:
                        await self._revert_user_fields(user_id, previous_user_values)
                    raise

            logger.info(f"✅ {table} of {user_id} updated ({', '.join([*user_changes.keys(), *changes.keys()])})")

        except Exception as e:
            logger.error(f"Error updating {table} for {user_id} - {str(e)}")
            if isinstance(e, (UserNotFoundError, ProfileNotFoundError)):
                raise e
            raise DatabaseError(f"Failed to update profile: {str(e)}")

    async def _revert_user_fields(self, user_id: str, previous_user_values: Dict[str, Any]) -> None:
        try:
            await self.supabase_client.table("users").update(previous_user_values).eq("id", user_id).execute()
            logger.info(f"Restored users columns of {user_id} after a failed profile write")
        except Exception as e:
            # users and profile are now out of sync, the log line is all that is left
            logger.error(f"❌ Could not restore users columns for {user_id} - {str(e)}")

    async def _get_worker_service_branch(self, user_id: str) -> Dict[str, Any]:
        """Stored service_type and service_categories of a worker profile"""
        try:
            result = await self.supabase_client.table("worker_profiles").select("service_type, service_categories").eq("id", user_id).limit(1).execute()

            if not result.data:
                raise ProfileNotFoundError("Worker profile not found")

            return result.data[0]

        except Exception as e:
            logger.error(f"Error getting service type of worker {user_id} - {str(e)}")
            if isinstance(e, ProfileNotFoundError):
                raise e
            raise DatabaseError(f"Failed to fetch profile: {str(e)}")

    # =====================================
    # WORKER
    # =====================================

    async def get_worker_profile(self, user_id: str) -> WorkerProfileWithUser:
        profile = await self._get_profile_with_user("worker_profiles_with_user", user_id, "Worker profile not found")
        return WorkerProfileWithUser(**profile)

    # --------------------------------------------------------------

    async def update_worker_profile(self, user_id: str, profile_update: WorkerProfileUpdate) -> WorkerProfileWithUser:
        """
        Partial edit after onboarding.
        Pricing edits are re-derived from the hourly rates so daily/monthly never come from the client,
        and the legacy flat hourly_rate follows the first selected category.
        Categories and their pricing are only accepted for assistance workers, with the same rate rules as onboarding.
        """
        role = await self._get_user_role(user_id)
        if role != UserRole.WORKER.value:
            raise ValidationError("Only workers can edit a worker profile")

        changes = profile_update.model_dump(mode="json", exclude_unset=True, exclude={"service_pricing"})

        if changes.get("service_categories") is not None or profile_update.service_pricing is not None:
            stored = await self._get_worker_service_branch(user_id)

            # categories and category pricing only belong to the assistance branch
            if stored.get("service_type") != ServiceType.ASSISTANCE.value:
                if changes.get("service_categories") or profile_update.service_pricing:
                    raise ValidationError("Service categories are only available for assistance services")
            else:
                selected = changes["service_categories"] if "service_categories" in changes else (stored.get("service_categories") or [])
                if not selected:
                    raise ValidationError("Please select at least one service category")

                if profile_update.service_pricing is not None:
                    OnboardingWizard.validate_pricing(ServiceType.ASSISTANCE.value, selected, PricingStep(service_pricing=profile_update.service_pricing))
                    service_pricing = derive_service_pricing({c: profile_update.service_pricing[c] for c in selected if c in profile_update.service_pricing})
                    changes["service_pricing"] = {key: pricing.model_dump() for key, pricing in service_pricing.items()}

                    first = service_pricing[selected[0]]
                    changes.update(hourly_rate=first.hourly_rate, daily_rate=first.daily_rate, monthly_rate=first.monthly_rate)

        if "service_categories" in changes and AssistanceCategory.TRANSLATOR.value not in (changes["service_categories"] or []):
            changes["service_languages"] = []

        await self._update_profile("worker_profiles", user_id, changes, "Worker profile not found")
        return await self.get_worker_profile(user_id)

    # --------------------------------------------------------------

    async def get_public_worker_profile(self, worker_id: str) -> WorkerProfileWithUser:
        """Worker detail page; only approved, active profiles are public"""
        profile = await self._get_profile_with_user("worker_profiles_with_user", worker_id, "Worker profile not found")

        if profile.get("approval_status") not in (None, "approved") or profile.get("profile_status") == "suspended":
            raise ProfileNotFoundError("Worker profile not found")

        return WorkerProfileWithUser(**profile)

    # =====================================
    # EMPLOYER
    # =====================================

    async def get_employer_profile(self, user_id: str) -> EmployerProfileWithUser:
        profile = await self._get_profile_with_user("employer_profiles_with_user", user_id, "Employer profile not found")
        return EmployerProfileWithUser(**profile)

    # --------------------------------------------------------------

    async def update_employer_profile(self, user_id: str, profile_update: EmployerProfileUpdate) -> EmployerProfileWithUser:
        role = await self._get_user_role(user_id)
        if role != UserRole.EMPLOYER.value:
            raise ValidationError("Only employers can edit an employer profile")

        changes = profile_update.model_dump(mode="json", exclude_unset=True)
        await self._update_profile("employer_profiles", user_id, changes, "Employer profile not found")
        return await self.get_employer_profile(user_id)

    # =====================================
    # COMPLETION
    # =====================================

    async def get_profile_completion(self, user_id: str) -> ProfileCompletionResponse:
        role = await self._get_user_role(user_id)

        if role == UserRole.WORKER.value:
            profile: Any = await self.get_worker_profile(user_id)
        elif role == UserRole.EMPLOYER.value:
            profile = await self.get_employer_profile(user_id)
        else:
            raise ValidationError("Admins do not have a profile")

        return ProfileCompletionResponse(role=role, completion_percent=calculate_profile_completion(profile.model_dump(), role))
