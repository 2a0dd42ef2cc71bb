from supabase import AsyncClient
from app.models.upload_models import ImageBucket, AvatarUploadResponse, AdminImageUploadResponse, ImageUploadResponse
from app.models.admin.admin_action_models import ActionResultResponse
from app.models.onboarding_models import MAX_GALLERY_IMAGES, MAX_SERVICE_IMAGES
from app.utils.query_helpers import utc_now_iso
from app.custom_error import UserNotFoundError, ValidationError, DatabaseError, ServerError
from PIL import Image, UnidentifiedImageError
from typing import List, Tuple
from io import BytesIO
import logging
import secrets
import time

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 5 * 1024 * 1024

# extension -> Pillow format
ALLOWED_EXTENSIONS = {"jpg": "JPEG", "jpeg": "JPEG", "png": "PNG", "gif": "GIF", "webp": "WEBP"}
# declared content type -> Pillow format
ALLOWED_CONTENT_TYPES = {"image/jpeg": "JPEG", "image/jpg": "JPEG", "image/png": "PNG", "image/gif": "GIF", "image/webp": "WEBP"}

AVATAR_BUCKET = "avatars"
ADMIN_IMAGE_BUCKET = "admin-images"
BUCKET_LIMITS = {ImageBucket.GALLERIES: MAX_GALLERY_IMAGES, ImageBucket.SERVICES: MAX_SERVICE_IMAGES}

# (content, file name, declared content type)
UploadedImage = Tuple[bytes, str, str]


def validate_image(file_content: bytes, file_name: str, content_type: str) -> str:
    """
    Check an uploaded image and return its normalized extension.
    The declared content type, the file extension and the format Pillow reads from the bytes must all name the same format,
    so a png renamed to .jpg is rejected.
    """
    if not file_content:
        raise ValidationError("No file provided")

    if len(file_content) > MAX_IMAGE_SIZE:
        raise ValidationError("File size exceeds 5MB limit")

    extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    expected_format = ALLOWED_EXTENSIONS.get(extension)
    declared_format = ALLOWED_CONTENT_TYPES.get((content_type or "").lower())

    if not expected_format or not declared_format:
        raise ValidationError("Invalid file type. Only JPG, PNG, GIF, and WebP are allowed.")

    try:
        with Image.open(BytesIO(file_content)) as image:
            actual_format = image.format
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError):
        # DecompressionBombError: declared size far beyond Image.MAX_IMAGE_PIXELS
        raise ValidationError("File must be an image")

    if not (expected_format == declared_format == actual_format):
        raise ValidationError("File content does not match its type")

    return extension


class UploadService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def _upload(self, bucket: str, path: str, file_content: bytes, content_type: str) -> str:
        """Upload bytes to a storage bucket and return the public URL"""
        try:
            await self.supabase_client.storage.from_(bucket).upload(path=path, file=file_content, file_options={"content-type": content_type})
            public_url = await self.supabase_client.storage.from_(bucket).get_public_url(path)

            logger.info(f"✅ Uploaded {bucket}/{path}")
            return public_url

        except Exception as e:
            logger.error(f"Error uploading {bucket}/{path} - {str(e)}")
            raise ServerError(f"Upload failed: {str(e)}")

    # =====================================
    # AVATAR
    # =====================================

    async def upload_avatar(self, user_id: str, image: UploadedImage) -> AvatarUploadResponse:
        """Store a new avatar under {user_id}/, drop the previous file and point users.avatar_url at the new one"""
        file_content, file_name, content_type = image
        extension = validate_image(file_content, file_name, content_type)

        try:
            user_result = await self.supabase_client.table("users").select("avatar_url").eq("id", user_id).limit(1).execute()

            if not user_result.data:
                raise UserNotFoundError()

            old_avatar_url = user_result.data[0].get("avatar_url")
            if old_avatar_url and f"/{AVATAR_BUCKET}/" in old_avatar_url:
                old_path = old_avatar_url.split(f"/{AVATAR_BUCKET}/", 1)[1].split("?", 1)[0]
                try:
                    await self.supabase_client.storage.from_(AVATAR_BUCKET).remove([old_path])
                except Exception as e:
                    # an orphaned old file does not block the new avatar
                    logger.error(f"Failed to remove old avatar {old_path} - {str(e)}")

            avatar_url = await self._upload(AVATAR_BUCKET, f"{user_id}/{int(time.time() * 1000)}.{extension}", file_content, content_type)

            result = await self.supabase_client.table("users").update({"avatar_url": avatar_url, "updated_at": utc_now_iso()}).eq("id", user_id).execute()

            if not result.data:
                raise DatabaseError("Failed to update profile")

            return AvatarUploadResponse(success=True, avatar_url=avatar_url, message="Avatar uploaded successfully")

        except Exception as e:
            logger.error(f"Error uploading avatar for {user_id} - {str(e)}")
            if isinstance(e, (UserNotFoundError, DatabaseError, ServerError)):
                raise e
            raise ServerError(f"Failed to upload avatar: {str(e)}")

    # =====================================
    # WORKER IMAGES
    # =====================================

    async def upload_images(self, user_id: str, bucket: ImageBucket, images: List[UploadedImage]) -> ImageUploadResponse:
        """Gallery and service images for the onboarding wizard and the profile editor"""
        if not images:
            raise ValidationError("No file provided")

        limit = BUCKET_LIMITS[bucket]
        if len(images) > limit:
            raise ValidationError(f"Maximum {limit} {'gallery' if bucket == ImageBucket.GALLERIES else 'service'} images allowed")

        # validate all files before any of them is stored
        extensions = [validate_image(*image) for image in images]

        urls = []
        for (file_content, _, content_type), extension in zip(images, extensions):
            path = f"{user_id}/{int(time.time() * 1000)}-{secrets.token_hex(6)}.{extension}"
            urls.append(await self._upload(bucket.value, path, file_content, content_type))

        return ImageUploadResponse(success=True, urls=urls)

    # =====================================
    # ADMIN IMAGES
    # =====================================

    async def upload_admin_image(self, image: UploadedImage) -> AdminImageUploadResponse:
        """Logos and banners for the site settings"""
        file_content, file_name, content_type = image
        extension = validate_image(file_content, file_name, content_type)

        stored_name = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{extension}"
        url = await self._upload(ADMIN_IMAGE_BUCKET, stored_name, file_content, content_type)

        return AdminImageUploadResponse(success=True, url=url, file_name=stored_name)

    # --------------------------------------------------------------

    async def delete_admin_image(self, file_name: str) -> ActionResultResponse:
        if not file_name:
            raise ValidationError("No fileName provided")

        try:
            await self.supabase_client.storage.from_(ADMIN_IMAGE_BUCKET).remove([file_name])

            logger.info(f"✅ Removed {ADMIN_IMAGE_BUCKET}/{file_name}")
            return ActionResultResponse(success=True, message="Image deleted successfully")

        except Exception as e:
            logger.error(f"Error deleting {ADMIN_IMAGE_BUCKET}/{file_name} - {str(e)}")
            raise ServerError(f"Delete failed: {str(e)}")
