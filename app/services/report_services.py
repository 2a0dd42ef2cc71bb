from supabase import AsyncClient
from app.models.report_models import (
    ReportStatus,
    ReportAction,
    ReportCreate,
    ReportResponse,
    ReportListResponse,
    ReportUpdateRequest,
    ReportStatsResponse,
)
from app.models.admin.admin_action_models import AdminActionType, AdminTargetType, RequestMeta, ActionResultResponse
from app.services.admin.admin_action_services import AuditedAdminService
from app.utils.admin_auth import AdminContext
from app.utils.query_helpers import utc_now_iso
from app.custom_error import UserNotFoundError, NotFoundError, ValidationError, DatabaseError, ServerError
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

REPORT_LIST_SELECT = (
    "*, reporter:users!reporter_id(id, email, full_name), reported_user:users!reported_user_id(id, email, full_name), "
    "assigned_admin:users!assigned_to(id, email, full_name)"
)
REPORT_DETAIL_SELECT = (
    "*, reporter:users!reporter_id(id, email, full_name, avatar_url), reported_user:users!reported_user_id(id, email, full_name, avatar_url, role), "
    "assigned_admin:users!assigned_to(id, email, full_name)"
)


class ReportService(AuditedAdminService):
    """User reports and disputes, filed by any signed in user and worked through by admins"""

    async def create_report(self, reporter_id: str, report: ReportCreate) -> ReportResponse:
        try:
            user_result = await self.supabase_client.table("users").select("role").eq("id", reporter_id).limit(1).execute()

            if not user_result.data:
                raise UserNotFoundError()

            report_data = report.model_dump(mode="json", exclude={"reporter_id"})
            report_data.update({"reporter_id": reporter_id, "reporter_role": user_result.data[0]["role"], "status": ReportStatus.PENDING.value})

            result = await self.supabase_client.table("reports").insert(report_data).execute()

            if not result.data:
                raise DatabaseError("Failed to create report")

            logger.info(f"✅ Report filed by {reporter_id} against {report.reported_type.value} {report.reported_id}")
            return ReportResponse(**result.data[0])

        except Exception as e:
            logger.error(f"Error creating report: {str(e)}")
            if isinstance(e, (UserNotFoundError, DatabaseError)):
                raise e
            raise ServerError(f"Failed to create report: {str(e)}")

    # =====================================
    # ADMIN READS
    # =====================================

    async def get_reports(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        reported_type: Optional[str] = None,
        assigned_to: Optional[str] = None,
        reporter_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> ReportListResponse:
        try:
            query = self.supabase_client.table("reports").select(REPORT_LIST_SELECT, count="exact")

            filters = {
                "status": status,
                "priority": priority,
                "category": category,
                "reported_type": reported_type,
                "assigned_to": assigned_to,
                "reporter_id": reporter_id,
            }
            for column, value in filters.items():
                if value:
                    query = query.eq(column, value)

            result = await query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()

            return ReportListResponse(
                reports=[ReportResponse(**row) for row in result.data or []],
                total=result.count or 0,
                limit=limit,
                offset=offset,
            )

        except Exception as e:
            logger.error(f"Error fetching reports: {str(e)}")
            raise ServerError(f"Failed to fetch reports: {str(e)}")

    # --------------------------------------------------------------

    async def get_report(self, report_id: str) -> ReportResponse:
        try:
            result = await self.supabase_client.table("reports").select(REPORT_DETAIL_SELECT).eq("id", report_id).limit(1).execute()

            if not result.data:
                raise NotFoundError("Report not found")

            return ReportResponse(**result.data[0])

        except Exception as e:
            logger.error(f"Error fetching report {report_id}: {str(e)}")
            if isinstance(e, NotFoundError):
                raise e
            raise ServerError(f"Failed to fetch report: {str(e)}")

    # --------------------------------------------------------------

    async def get_report_stats(self) -> ReportStatsResponse:
        try:
            result = await self.supabase_client.table("reports").select("status, category, priority").execute()
            rows = result.data or []

            by_category: Dict[str, int] = {}
            by_priority: Dict[str, int] = {}
            for row in rows:
                by_category[row.get("category")] = by_category.get(row.get("category"), 0) + 1
                by_priority[row.get("priority")] = by_priority.get(row.get("priority"), 0) + 1

            return ReportStatsResponse(
                total=len(rows),
                pending=sum(1 for row in rows if row.get("status") == ReportStatus.PENDING.value),
                investigating=sum(1 for row in rows if row.get("status") == ReportStatus.INVESTIGATING.value),
                resolved=sum(1 for row in rows if row.get("status") == ReportStatus.RESOLVED.value),
                dismissed=sum(1 for row in rows if row.get("status") == ReportStatus.DISMISSED.value),
                by_category=by_category,
                by_priority=by_priority,
            )

        except Exception as e:
            logger.error(f"Error fetching report stats: {str(e)}")
            raise ServerError(f"Failed to fetch reports stats: {str(e)}")

    # =====================================
    # ADMIN WORKFLOW
    # =====================================

    async def update_report(self, report_id: str, body: ReportUpdateRequest, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        """assign / update_priority / resolve / dismiss"""
        if not body.action:
            raise ValidationError("Action is required")

        admin_id, admin_email = admin.resolve_actor(body.admin_id, body.admin_email)
        now = utc_now_iso()
        audit_entry: Optional[Dict[str, Any]] = None

        if body.action == ReportAction.ASSIGN:
            if not body.assigned_to:
                raise ValidationError("assigned_to is required for assign action")
            update_data = {"assigned_to": body.assigned_to, "status": ReportStatus.INVESTIGATING.value}
            audit_entry = {"action_type": AdminActionType.ASSIGN_REPORT}

        elif body.action == ReportAction.UPDATE_PRIORITY:
            if not body.priority:
                raise ValidationError("priority is required for update_priority action")
            update_data = {"priority": body.priority.value}

        elif body.action == ReportAction.RESOLVE:
            if not body.resolution_notes or not admin_id:
                raise ValidationError("resolution_notes and admin_id are required for resolve action")
            update_data = {
                "status": ReportStatus.RESOLVED.value,
                "resolution_notes": body.resolution_notes,
                "resolved_at": now,
                "resolved_by": admin_id,
                "action_taken": body.action_taken,
                "warning_issued": body.warning_issued,
                "account_suspended": body.account_suspended,
                "account_banned": body.account_banned,
            }
            audit_entry = {"action_type": AdminActionType.RESOLVE_REPORT, "notes": body.resolution_notes}

        else:
            if not body.reason or not admin_id:
                raise ValidationError("reason and admin_id are required for dismiss action")
            update_data = {
                "status": ReportStatus.DISMISSED.value,
                "resolution_notes": body.reason,
                "resolved_at": now,
                "resolved_by": admin_id,
            }
            audit_entry = {"action_type": AdminActionType.DISMISS_REPORT, "notes": body.reason}

        try:
            update_data["updated_at"] = now
            result = await self.supabase_client.table("reports").update(update_data).eq("id", report_id).execute()

            if not result.data:
                raise NotFoundError("Report not found")

            if audit_entry:
                await self._audit(
                    admin,
                    admin_id,
                    admin_email,
                    meta,
                    target_type=AdminTargetType.REPORT,
                    target_id=report_id,
                    target_name=body.report_title or "Report",
                    **audit_entry,
                )

            logger.info(f"✅ Report {report_id}: {body.action.value}")
            return ActionResultResponse(success=True, message=f"Report {body.action.value} successful")

        except Exception as e:
            logger.error(f"Error updating report {report_id}: {str(e)}")
            if isinstance(e, NotFoundError):
                raise e
            raise DatabaseError(f"Failed to {body.action.value} report: {str(e)}")
