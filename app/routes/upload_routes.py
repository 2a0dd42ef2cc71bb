from fastapi import APIRouter, Depends, File, UploadFile, Query
from supabase import AsyncClient
from app.utils.supabase_client_handlers import get_supabase_client
from app.utils.user_auth import get_current_user_id
from app.services.upload_services import UploadService, UploadedImage
from app.models.upload_models import ImageBucket, AvatarUploadResponse, ImageUploadResponse
from typing import List

upload_router = APIRouter(tags=["Uploads"])


async def get_upload_service(supabase_client: AsyncClient = Depends(get_supabase_client)) -> UploadService:
    """Dependency to get UploadService instance"""
    return UploadService(supabase_client)


async def process_uploaded_images(uploaded_images: List[UploadFile]) -> List[UploadedImage]:
    """Helper to convert UploadFile objects to (bytes, filename, content type) tuples"""
    processed_image_files = []
    for uploaded_image in uploaded_images:
        if uploaded_image.filename:
            file_content = await uploaded_image.read()
            processed_image_files.append((file_content, uploaded_image.filename, uploaded_image.content_type or ""))

    return processed_image_files


@upload_router.post("/upload-avatar", response_model=AvatarUploadResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Replace the avatar of the current user"""
    file_content = await file.read()
    return await upload_service.upload_avatar(user_id, (file_content, file.filename or "", file.content_type or ""))


# --------------------------------------------------------------


@upload_router.post("/uploads/images", response_model=ImageUploadResponse)
async def upload_images(
    bucket: ImageBucket = Query(..., description="galleries or services"),
    files: List[UploadFile] = File(...),
    user_id: str = Depends(get_current_user_id),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Gallery or service images, returns their public URLs in upload order"""
    images = await process_uploaded_images(files)
    return await upload_service.upload_images(user_id, bucket, images)
