from fastapi import Depends, Header, Request
from pydantic import BaseModel
from supabase import AsyncClient
from app.configs.app_settings import settings
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.user_auth import get_optional_session_user
from app.models.user_models import SessionUser, UserRole
from app.models.admin.admin_action_models import RequestMeta
from app.custom_error import UnauthorizedError, ForbiddenError, ValidationError
from typing import Optional, Tuple
import secrets
import logging

logger = logging.getLogger(__name__)

# Every admin route depends on require_admin, so there is exactly one place deciding who is an admin:
# 1. a valid session whose users.role is "admin" (authoritative whenever a session is presented)
# 2. otherwise the x-admin-secret header matching ADMIN_SECRET, used by internal tooling
# A missing ADMIN_SECRET disables the second path.


class AdminContext(BaseModel):
    auth_method: str  # "session" | "secret"
    admin_id: Optional[str] = None
    admin_email: Optional[str] = None

    def resolve_actor(self, admin_id: Optional[str] = None, admin_email: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
        """Acting admin identity: the session wins, body fields are only used with the secret"""
        if self.auth_method == "session":
            return self.admin_id, self.admin_email
        return admin_id, admin_email

    def require_actor(self, admin_id: Optional[str] = None, admin_email: Optional[str] = None) -> Tuple[str, str]:
        actor_id, actor_email = self.resolve_actor(admin_id, admin_email)
        if not actor_id or not actor_email:
            raise ValidationError("Admin ID and email are required")
        return actor_id, actor_email


async def is_user_admin(supabase_client: AsyncClient, user_id: str) -> bool:
    """Check users.role for the given id"""
    try:
        result = await supabase_client.table("users").select("role").eq("id", user_id).limit(1).execute()
    except Exception as e:
        logger.error(f"Error checking admin status - {str(e)}")
        return False

    return bool(result.data) and result.data[0].get("role") == UserRole.ADMIN.value


async def require_admin(
    x_admin_secret: Optional[str] = Header(None, alias="x-admin-secret"),
    session_user: Optional[SessionUser] = Depends(get_optional_session_user),
    supabase_client: AsyncClient = Depends(get_supabase_client),
) -> AdminContext:
    """Capability check shared by all admin routes"""
    if session_user is not None:
        if await is_user_admin(supabase_client, session_user.id):
            return AdminContext(auth_method="session", admin_id=session_user.id, admin_email=session_user.email)
        logger.warning(f"Non admin user {session_user.id} tried to reach an admin route")
        raise ForbiddenError()

    if x_admin_secret:
        if settings.ADMIN_SECRET and secrets.compare_digest(x_admin_secret, settings.ADMIN_SECRET):
            return AdminContext(auth_method="secret")
        raise ForbiddenError("Invalid admin secret")

    raise UnauthorizedError("Unauthorized - Authentication required")


def get_request_meta(request: Request) -> RequestMeta:
    """Client address and user agent for audit entries; the first x-forwarded-for hop wins behind a proxy"""
    forwarded_for = request.headers.get("x-forwarded-for")
    ip_address = forwarded_for.split(",")[0].strip() if forwarded_for else (request.client.host if request.client else None)
    return RequestMeta(ip_address=ip_address, user_agent=request.headers.get("user-agent"))
