from supabase import AsyncClient
from app.models.admin.admin_action_models import (
    AdminActionCreate,
    AdminActionResponse,
    AdminActionListResponse,
    AdminActivitySummaryResponse,
    RequestMeta,
)
from app.utils.admin_auth import AdminContext
from app.custom_error import ServerError
from datetime import datetime, timedelta, timezone
from typing import Optional, List, Any
import logging

logger = logging.getLogger(__name__)

# embedded join on the acting admin
ADMIN_ACTION_SELECT = "*, admin:users!admin_id(id, email, full_name)"


class AdminActionService:
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    # =====================================
    # WRITE
    # =====================================

    async def log_action(self, action: AdminActionCreate) -> Optional[AdminActionResponse]:
        """
        Append an audit entry. Never raises: the state change it describes has already been committed,
        so a failed insert is only logged.
        """
        try:
            result = await self.supabase_client.table("admin_actions").insert(action.model_dump(mode="json", exclude_none=True)).execute()

            if not result.data:
                logger.error(f"❌ Audit entry {action.action_type.value} for {action.target_id} was not stored")
                return None

            logger.info(f"✅ Audit entry {action.action_type.value} on {action.target_type.value} {action.target_id} by {action.admin_email}")
            return AdminActionResponse(**result.data[0])

        except Exception as e:
            logger.error(f"❌ Failed to log admin action {action.action_type.value} for {action.target_id}: {str(e)}")
            return None

    # =====================================
    # READ
    # =====================================

    async def get_actions(
        self,
        admin_id: Optional[str] = None,
        action_type: Optional[str] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> AdminActionListResponse:
        """Audit log, newest first"""
        try:
            query = self.supabase_client.table("admin_actions").select(ADMIN_ACTION_SELECT, count="exact")

            if admin_id:
                query = query.eq("admin_id", admin_id)
            if action_type:
                query = query.eq("action_type", action_type)
            if target_type:
                query = query.eq("target_type", target_type)
            if target_id:
                query = query.eq("target_id", target_id)
            if start_date:
                query = query.gte("created_at", start_date)
            if end_date:
                query = query.lte("created_at", end_date)

            result = await query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()

            return AdminActionListResponse(
                actions=[AdminActionResponse(**row) for row in result.data or []],
                total=result.count or 0,
                limit=limit,
                offset=offset,
            )

        except Exception as e:
            logger.error(f"Error fetching admin actions: {str(e)}")
            raise ServerError(f"Failed to fetch admin actions: {str(e)}")

    # --------------------------------------------------------------

    async def get_target_history(self, target_type: str, target_id: str, limit: int = 20) -> List[AdminActionResponse]:
        """Everything admins did to one record"""
        try:
            result = (
                await self.supabase_client.table("admin_actions")
                .select(ADMIN_ACTION_SELECT)
                .eq("target_type", target_type)
                .eq("target_id", target_id)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )

            return [AdminActionResponse(**row) for row in result.data or []]

        except Exception as e:
            logger.error(f"Error fetching action history for {target_type} {target_id}: {str(e)}")
            raise ServerError(f"Failed to fetch target action history: {str(e)}")

    # --------------------------------------------------------------

    async def get_activity_summary(self, admin_id: str, days: int = 30) -> AdminActivitySummaryResponse:
        try:
            start_date = datetime.now(timezone.utc) - timedelta(days=days)

            result = (
                await self.supabase_client.table("admin_actions")
                .select("*")
                .eq("admin_id", admin_id)
                .gte("created_at", start_date.isoformat())
                .order("created_at", desc=True)
                .execute()
            )

            rows = result.data or []
            actions_by_type = {}
            for row in rows:
                actions_by_type[row["action_type"]] = actions_by_type.get(row["action_type"], 0) + 1

            return AdminActivitySummaryResponse(
                total_actions=len(rows),
                actions_by_type=actions_by_type,
                recent_actions=[AdminActionResponse(**row) for row in rows[:10]],
            )

        except Exception as e:
            logger.error(f"Error fetching activity summary for admin {admin_id}: {str(e)}")
            raise ServerError(f"Failed to fetch admin activity summary: {str(e)}")


class AuditedAdminService:
    """Base for admin services whose writes leave an audit entry"""

    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client
        self.action_service = AdminActionService(supabase_client)

    async def _audit(
        self,
        admin: AdminContext,
        body_admin_id: Optional[str],
        body_admin_email: Optional[str],
        meta: RequestMeta,
        **entry: Any,
    ) -> None:
        """Audit entry for the acting admin, skipped when no identity is known (secret auth without admin fields)"""
        admin_id, admin_email = admin.resolve_actor(body_admin_id, body_admin_email)
        if not admin_id or not admin_email:
            logger.warning(f"Audit entry {entry.get('action_type')} skipped: no admin identity")
            return

        await self.action_service.log_action(
            AdminActionCreate(admin_id=admin_id, admin_email=admin_email, ip_address=meta.ip_address, user_agent=meta.user_agent, **entry)
        )
