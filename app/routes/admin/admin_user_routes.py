from fastapi import APIRouter, Depends
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import require_admin
from app.services.user_services import UserService
from typing import List, Dict, Any

admin_user_router = APIRouter(prefix="/admin/users", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_user_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> UserService:
    """Dependency to get UserService instance"""
    return UserService(supabase_client)


@admin_user_router.get("", response_model=List[Dict[str, Any]])
async def list_auth_users(user_service: UserService = Depends(get_user_service)):
    """Supabase Auth accounts"""
    return await user_service.list_auth_users()
