from fastapi import APIRouter, Depends
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import AdminContext, require_admin, get_request_meta
from app.services.admin.admin_settings_services import AdminSettingsService
from app.models.admin.admin_settings_models import AdminSettingsSnapshot, AdminSettingsUpdate, AdminSettingsUpdateResponse
from app.models.admin.admin_action_models import RequestMeta

# GET is public (header and footer read it), writes go through require_admin
admin_settings_router = APIRouter(prefix="/admin/settings", tags=["Admin"])


async def get_admin_settings_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> AdminSettingsService:
    """Dependency to get AdminSettingsService instance"""
    return AdminSettingsService(supabase_client)


@admin_settings_router.get("", response_model=AdminSettingsSnapshot)
async def get_settings(admin_settings_service: AdminSettingsService = Depends(get_admin_settings_service)):
    """Site settings"""
    return await admin_settings_service.get_settings()


# --------------------------------------------------------------


@admin_settings_router.patch("", response_model=AdminSettingsUpdateResponse)
@admin_settings_router.post("", response_model=AdminSettingsUpdateResponse)
async def update_settings(
    settings_update: AdminSettingsUpdate,
    admin: AdminContext = Depends(require_admin),
    meta: RequestMeta = Depends(get_request_meta),
    admin_settings_service: AdminSettingsService = Depends(get_admin_settings_service),
):
    """Partial update of the site settings"""
    return await admin_settings_service.update_settings(settings_update, admin, meta)
