from app.models.admin.admin_settings_models import AdminSettingsSnapshot, AdminSettingsUpdate, AdminSettingsUpdateResponse
from app.models.admin.admin_action_models import AdminActionType, AdminTargetType, RequestMeta
from app.services.admin.admin_action_services import AuditedAdminService
from app.utils.admin_auth import AdminContext
from app.utils.query_helpers import utc_now_iso
from app.custom_error import NotFoundError, ValidationError, DatabaseError, ServerError
import logging

logger = logging.getLogger(__name__)


class AdminSettingsService(AuditedAdminService):
    """
    Site wide settings (branding, SEO, header/footer, contact, social links) stored as the single admin_settings row.
    Every read returns a fresh frozen snapshot; nothing is cached between requests.
    """

    async def get_settings(self) -> AdminSettingsSnapshot:
        try:
            result = await self.supabase_client.table("admin_settings").select("*").limit(1).execute()

            if not result.data:
                raise NotFoundError("Settings not found")

            return AdminSettingsSnapshot(**result.data[0])

        except Exception as e:
            logger.error(f"Error fetching admin settings: {str(e)}")
            if isinstance(e, NotFoundError):
                raise e
            raise ServerError(f"Failed to fetch settings: {str(e)}")

    # --------------------------------------------------------------

    async def update_settings(self, settings_update: AdminSettingsUpdate, admin: AdminContext, meta: RequestMeta) -> AdminSettingsUpdateResponse:
        """Shallow merge of the sent keys into the row, then read the row back"""
        changes = settings_update.model_dump(mode="json", exclude_unset=True)
        if not changes:
            raise ValidationError("No settings to update")

        try:
            current = await self.get_settings()
            admin_id, admin_email = admin.resolve_actor()

            result = (
                await self.supabase_client.table("admin_settings")
                .update({**changes, "updated_at": utc_now_iso(), "updated_by": admin_id})
                .eq("id", current.id)
                .execute()
            )

            if not result.data:
                raise DatabaseError("Failed to update settings")

            await self._audit(
                admin,
                admin_id,
                admin_email,
                meta,
                action_type=AdminActionType.UPDATE_SETTINGS,
                target_type=AdminTargetType.SETTINGS,
                target_id=current.id,
                target_name="Site settings",
                changes=changes,
            )

            logger.info(f"✅ Admin settings updated ({', '.join(changes.keys())})")
            return AdminSettingsUpdateResponse(success=True, message="Settings updated successfully", settings=await self.get_settings())

        except Exception as e:
            logger.error(f"Error updating admin settings: {str(e)}")
            if isinstance(e, (NotFoundError, DatabaseError)):
                raise e
            raise DatabaseError(str(e))
