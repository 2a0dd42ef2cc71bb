from fastapi import APIRouter, Depends, Query, Request
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.user_auth import get_current_session_user
from app.utils.locale_utils import get_request_locale
from app.services.user_services import UserService
from app.models.user_models import (
    SessionUser,
    UserProfileCreate,
    UserProfileSaveResponse,
    UserExistsResponse,
    AuthCallbackRequest,
    AuthCallbackResponse,
)

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


async def get_user_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> UserService:
    """Dependency to get UserService instance"""
    return UserService(supabase_client)


# =====================================
# REGISTRATION
# =====================================


@auth_router.post("/create-user-profile", response_model=UserProfileSaveResponse)
async def create_user_profile(user_profile: UserProfileCreate, user_service: UserService = Depends(get_user_service)):
    """Backup for the sign up trigger: create or refresh the users row"""
    return await user_service.save_user_profile(user_profile)


# --------------------------------------------------------------


@auth_router.get("/create-user-profile", response_model=UserExistsResponse)
async def check_user_profile(
    user_id: str = Query(..., alias="userId", description="Auth user id"),
    user_service: UserService = Depends(get_user_service),
):
    """Check whether the users row exists"""
    return await user_service.check_user_exists(user_id)


# =====================================
# SESSION
# =====================================


@auth_router.post("/callback", response_model=AuthCallbackResponse)
async def auth_callback(
    request: Request,
    callback_request: AuthCallbackRequest,
    session_user: SessionUser = Depends(get_current_session_user),
    user_service: UserService = Depends(get_user_service),
):
    """Finish the OAuth sign in and tell the client where to go next"""
    locale = get_request_locale(request, callback_request.locale)
    return await user_service.handle_auth_callback(session_user, callback_request.role, locale)


# --------------------------------------------------------------


@auth_router.get("/user", response_model=SessionUser)
async def get_session_user(session_user: SessionUser = Depends(get_current_session_user)):
    """Auth user of the current session"""
    return session_user
