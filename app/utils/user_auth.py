from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.models.user_models import SessionUser
from app.custom_error import UnauthorizedError
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Sessions are issued by Supabase Auth in the browser. Every user specific request sends the access token as
# "Authorization: Bearer <jwt>" and we let Supabase validate it (signature, expiry, revoked sessions) via auth.get_user().
# auto_error=False so that routes which accept either a session or the admin secret can still run without a token.
session_bearer = HTTPBearer(auto_error=False)


async def get_optional_session_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(session_bearer),
    supabase_client: AsyncClient = Depends(get_supabase_client),
) -> Optional[SessionUser]:
    """Resolve the session user when a bearer token is present, None otherwise"""
    if not credentials or not credentials.credentials:
        return None

    try:
        response = await supabase_client.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.error(f"Session validation failed - {str(e)}")
        raise UnauthorizedError("Invalid or expired session")

    if not response or not response.user:
        raise UnauthorizedError("Invalid or expired session")

    user = response.user
    return SessionUser(id=str(user.id), email=user.email, user_metadata=user.user_metadata or {})


async def get_current_session_user(session_user: Optional[SessionUser] = Depends(get_optional_session_user)) -> SessionUser:
    """Require a valid session"""
    if session_user is None:
        raise UnauthorizedError("Unauthorized - No active session")
    return session_user


async def get_current_user_id(session_user: SessionUser = Depends(get_current_session_user)) -> str:
    """Extract the user id (auth.users id == public.users id) from the session"""
    return session_user.id
