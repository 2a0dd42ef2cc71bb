from fastapi import APIRouter, Depends, File, UploadFile, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.admin_auth import require_admin
from app.services.upload_services import UploadService
from app.models.upload_models import AdminImageUploadResponse
from app.models.admin.admin_action_models import ActionResultResponse

admin_upload_router = APIRouter(prefix="/admin/upload", tags=["Admin"], dependencies=[Depends(require_admin)])


async def get_upload_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> UploadService:
    """Dependency to get UploadService instance"""
    return UploadService(supabase_client)


@admin_upload_router.post("", response_model=AdminImageUploadResponse)
async def upload_admin_image(file: UploadFile = File(...), upload_service: UploadService = Depends(get_upload_service)):
    """Upload a logo or banner image"""
    file_content = await file.read()
    return await upload_service.upload_admin_image((file_content, file.filename or "", file.content_type or ""))


# --------------------------------------------------------------


@admin_upload_router.delete("", response_model=ActionResultResponse)
async def delete_admin_image(
    file_name: str = Query(..., alias="fileName", description="Stored file name"),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Remove an uploaded admin image"""
    return await upload_service.delete_admin_image(file_name)
