from supabase import AsyncClient
from app.models.user_models import (
    UserRole,
    SessionUser,
    UserProfileCreate,
    UserResponse,
    UserProfileSaveResponse,
    UserExistsResponse,
    AuthCallbackResponse,
)
from app.configs.app_settings import settings
from app.utils.locale_utils import localized_path
from app.utils.query_helpers import utc_now_iso
from app.custom_error import UserNotFoundError, ValidationError, DatabaseError, ServerError
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)

# roles a user can pick at registration; admins are promoted by hand
SELF_SERVICE_ROLES = (UserRole.WORKER.value, UserRole.EMPLOYER.value)


class UserService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def _get_user_row(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Helper method to get the users row, None when it does not exist yet"""
        try:
            result = await self.supabase_client.table("users").select("*").eq("id", user_id).limit(1).execute()
            return result.data[0] if result.data else None

        except Exception as e:
            logger.error(f"Error getting user {user_id} - {str(e)}")
            raise ServerError("Failed to fetch user")

    # -----------------------------------------------------------------------------------------------------------------------

    async def save_user_profile(self, user_profile: UserProfileCreate) -> UserProfileSaveResponse:
        """Create the users row after sign up, or refresh it when the trigger already created one"""
        if user_profile.role not in SELF_SERVICE_ROLES:
            raise ValidationError("Invalid role. Must be 'worker' or 'employer'")

        try:
            existing_user = await self._get_user_row(user_profile.user_id)

            if existing_user:
                # the route is unauthenticated: email and role of an existing account are never rewritten here
                if existing_user.get("role") != user_profile.role:
                    logger.warning(f"Ignoring role change {existing_user.get('role')} -> {user_profile.role} for existing user {user_profile.user_id}")

                user_data = {
                    "phone": user_profile.phone or existing_user.get("phone"),
                    "preferred_language": user_profile.preferred_language or existing_user.get("preferred_language") or settings.DEFAULT_LOCALE,
                    "updated_at": utc_now_iso(),
                }
                result = await self.supabase_client.table("users").update(user_data).eq("id", user_profile.user_id).execute()
                message = "User profile updated successfully"
            else:
                # the email stands in for the name until onboarding asks for it
                user_data = {
                    "id": user_profile.user_id,
                    "email": user_profile.email,
                    "role": user_profile.role,
                    "full_name": user_profile.email,
                    "phone": user_profile.phone or None,
                    "preferred_language": user_profile.preferred_language or settings.DEFAULT_LOCALE,
                }
                result = await self.supabase_client.table("users").insert(user_data).execute()
                message = "User profile created successfully"

            if not result.data:
                raise DatabaseError("Failed to save user profile")

            logger.info(f"✅ {message} for {user_profile.user_id} ({result.data[0].get('role')})")
            return UserProfileSaveResponse(success=True, message=message, user=UserResponse(**result.data[0]))

        except Exception as e:
            logger.error(f"Error in save_user_profile: {str(e)}")
            if isinstance(e, (DatabaseError, ServerError)):
                raise e
            raise DatabaseError(f"Failed to save user profile: {str(e)}")

    # -----------------------------------------------------------------------------------------------------------------------

    async def check_user_exists(self, user_id: str) -> UserExistsResponse:
        user = await self._get_user_row(user_id)
        if not user:
            return UserExistsResponse(exists=False, user=None)
        return UserExistsResponse(exists=True, user=UserResponse(**user))

    # -----------------------------------------------------------------------------------------------------------------------

    async def get_user(self, user_id: str) -> UserResponse:
        user = await self._get_user_row(user_id)
        if not user:
            raise UserNotFoundError()
        return UserResponse(**user)

    # -----------------------------------------------------------------------------------------------------------------------

    async def handle_auth_callback(self, session_user: SessionUser, role: Optional[str], locale: str) -> AuthCallbackResponse:
        """
        Finish an OAuth sign in.
        An existing user keeps the role they registered with. A new user must bring the role picked on the register page,
        a missing or unknown role sends them back to register instead of guessing one.
        """
        existing = await self.check_user_exists(session_user.id)
        if existing.exists:
            logger.info(f"✅ Existing user {session_user.id} signed in as {existing.user.role}")
            return AuthCallbackResponse(status="success", message="Welcome back! Redirecting...", redirect_to=localized_path(locale), user=existing.user)

        register_path = localized_path(locale, "/register")

        if not role:
            logger.error(f"❌ New user {session_user.id} without role")
            return AuthCallbackResponse(status="error", message="Registration error: Role is required. Please register again.", redirect_to=register_path)

        if role not in SELF_SERVICE_ROLES:
            logger.error(f"❌ New user {session_user.id} with invalid role {role}")
            return AuthCallbackResponse(status="error", message="Registration error: Invalid role. Please register again.", redirect_to=register_path)

        if not session_user.email:
            return AuthCallbackResponse(status="error", message="Failed to create profile. Please contact support.", redirect_to=register_path)

        try:
            saved = await self.save_user_profile(
                UserProfileCreate(
                    user_id=session_user.id,
                    email=session_user.email,
                    role=role,
                    phone=session_user.user_metadata.get("phone"),
                    preferred_language=session_user.user_metadata.get("preferred_language") or locale,
                )
            )
        except (DatabaseError, ServerError) as e:
            logger.error(f"❌ Failed to create profile for {session_user.id}: {e.detail}")
            return AuthCallbackResponse(status="error", message="Failed to create profile. Please contact support.", redirect_to=register_path)

        return AuthCallbackResponse(status="success", message="Registration successful! Redirecting...", redirect_to=localized_path(locale), user=saved.user)

    # -----------------------------------------------------------------------------------------------------------------------

    async def list_auth_users(self) -> List[Dict[str, Any]]:
        """Accounts known to Supabase Auth, including ones without a users row"""
        try:
            auth_users = await self.supabase_client.auth.admin.list_users()
            return [user.model_dump(mode="json") for user in auth_users]

        except Exception as e:
            logger.error(f"Error listing auth users: {str(e)}")
            raise ServerError(f"Failed to list users: {str(e)}")
