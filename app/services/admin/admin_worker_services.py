from app.models.admin.admin_worker_models import (
    ApprovalStatus,
    ProfileStatus,
    WorkerApprovalRequest,
    WorkerRejectionRequest,
    AccountActionRequest,
    AdminNotesUpdate,
    AdminWorkerProfileUpdate,
    AdminWorkerCard,
    AdminWorkerListResponse,
    AdminWorkerDetail,
)
from app.models.admin.admin_action_models import AdminActionType, AdminTargetType, RequestMeta, ActionResultResponse
from app.models.user_models import UserRole, AccountStatus
from app.services.admin.admin_action_services import AuditedAdminService
from app.services.pricing_services import calculate_daily_rate, calculate_monthly_rate
from app.utils.admin_auth import AdminContext
from app.custom_error import UserNotFoundError, ProfileNotFoundError, ValidationError, DatabaseError, ServerError
from app.utils.query_helpers import utc_now_iso, first_embedded
from typing import Optional
import logging

logger = logging.getLogger(__name__)

WORKER_PROFILE_LIST_COLUMNS = (
    "bio, service_type, service_categories, hourly_rate, daily_rate, monthly_rate, rating, total_reviews, completed_jobs, total_jobs, "
    "city, district, approval_status, profile_status, is_verified, created_at, updated_at"
)

WORKER_PROFILE_DETAIL_COLUMNS = (
    "bio, skills, experience_years, service_type, service_categories, service_description, service_level, service_languages, "
    "hourly_rate, daily_rate, monthly_rate, currency, service_pricing, rating, total_reviews, completed_jobs, total_jobs, "
    "city, district, country, address, approval_status, approved_at, approved_by, rejection_reason, profile_status, "
    "is_verified, available, portfolio_images, gallery_images, service_images, languages, certifications, "
    "facebook_url, linkedin_url, website_url, setup_step, setup_completed, created_at, updated_at"
)

# suspend/unsuspend and ban/unban share the same shape
ACCOUNT_ACTIONS = {
    "suspend": {
        "status": AccountStatus.SUSPENDED,
        "fields": ("suspended_at", "suspended_by", "suspension_reason"),
        "audit": AdminActionType.SUSPEND_USER,
        "reason_required": "Suspension reason is required",
        "message": "User account suspended successfully",
    },
    "unsuspend": {
        "status": AccountStatus.ACTIVE,
        "fields": ("suspended_at", "suspended_by", "suspension_reason"),
        "audit": AdminActionType.UNSUSPEND_USER,
        "message": "User account unsuspended successfully",
    },
    "ban": {
        "status": AccountStatus.BANNED,
        "fields": ("banned_at", "banned_by", "ban_reason"),
        "audit": AdminActionType.BAN_USER,
        "reason_required": "Ban reason is required",
        "message": "User account banned successfully",
    },
    "unban": {
        "status": AccountStatus.ACTIVE,
        "fields": ("banned_at", "banned_by", "ban_reason"),
        "audit": AdminActionType.UNBAN_USER,
        "message": "User account unbanned successfully",
    },
}


class AdminWorkerService(AuditedAdminService):
    # =====================================
    # LISTING
    # =====================================

    async def get_workers(
        self,
        status: Optional[ApprovalStatus] = None,
        account_status: Optional[AccountStatus] = None,
        profile_status: Optional[ProfileStatus] = None,
        city: Optional[str] = None,
        service_type: Optional[str] = None,
        verified: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> AdminWorkerListResponse:
        """Workers with their profile, newest first"""
        try:
            profile_filters = {
                "approval_status": status.value if status else None,
                "profile_status": profile_status.value if profile_status else None,
                "city": city,
                "service_type": service_type,
                "is_verified": verified,
            }
            profile_filters = {key: value for key, value in profile_filters.items() if value is not None}

            # !inner so that filtering on the profile drops users instead of nulling the embed
            embed = "worker_profiles!inner" if profile_filters else "worker_profiles"
            query = (
                self.supabase_client.table("users")
                .select(f"id, email, full_name, avatar_url, phone, account_status, created_at, {embed}({WORKER_PROFILE_LIST_COLUMNS})", count="exact")
                .eq("role", UserRole.WORKER.value)
            )

            for column, value in profile_filters.items():
                query = query.eq(f"worker_profiles.{column}", value)
            if account_status:
                query = query.eq("account_status", account_status.value)
            if search:
                query = query.or_(f"full_name.ilike.%{search}%,email.ilike.%{search}%")

            result = await query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()

            workers = []
            for row in result.data or []:
                worker_profile = first_embedded(row, "worker_profiles")
                workers.append(AdminWorkerCard(**row, worker_profile=worker_profile))

            return AdminWorkerListResponse(workers=workers, total=result.count or 0, limit=limit, offset=offset)

        except Exception as e:
            logger.error(f"Error fetching workers: {str(e)}")
            raise ServerError(f"Failed to fetch workers: {str(e)}")

    # --------------------------------------------------------------

    async def get_worker(self, worker_id: str) -> AdminWorkerDetail:
        try:
            result = (
                await self.supabase_client.table("users")
                .select(
                    "id, email, full_name, avatar_url, phone, account_status, suspended_at, suspended_by, suspension_reason, "
                    "banned_at, banned_by, ban_reason, admin_notes, warning_count, created_at, updated_at, "
                    f"worker_profiles({WORKER_PROFILE_DETAIL_COLUMNS})"
                )
                .eq("id", worker_id)
                .eq("role", UserRole.WORKER.value)
                .limit(1)
                .execute()
            )

            if not result.data:
                raise UserNotFoundError()

            row = result.data[0]
            worker_profile = first_embedded(row, "worker_profiles")
            row["warning_count"] = row.get("warning_count") or 0
            return AdminWorkerDetail(**row, worker_profile=worker_profile)

        except Exception as e:
            logger.error(f"Error fetching worker {worker_id}: {str(e)}")
            if isinstance(e, UserNotFoundError):
                raise e
            raise ServerError(f"Failed to fetch worker: {str(e)}")

    # =====================================
    # MODERATION
    # =====================================

    async def approve_worker(self, worker_id: str, body: WorkerApprovalRequest, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        try:
            admin_id, admin_email = admin.require_actor(body.admin_id, body.admin_email)
            now = utc_now_iso()

            result = (
                await self.supabase_client.table("worker_profiles")
                .update(
                    {
                        "approval_status": ApprovalStatus.APPROVED.value,
                        "approved_at": now,
                        "approved_by": admin_id,
                        "profile_status": ProfileStatus.ACTIVE.value,
                        "updated_at": now,
                    }
                )
                .eq("id", worker_id)
                .execute()
            )

            if not result.data:
                raise ProfileNotFoundError("Worker profile not found")

            await self._audit(
                admin,
                admin_id,
                admin_email,
                meta,
                action_type=AdminActionType.APPROVE_WORKER,
                target_type=AdminTargetType.WORKER_PROFILE,
                target_id=worker_id,
                target_name=body.worker_name or "Unknown",
            )

            logger.info(f"✅ Worker {worker_id} approved by {admin_email}")
            return ActionResultResponse(success=True, message="Worker profile approved successfully")

        except Exception as e:
            logger.error(f"Error approving worker {worker_id}: {str(e)}")
            if isinstance(e, (ValidationError, ProfileNotFoundError)):
                raise e
            raise DatabaseError(f"Failed to approve worker profile: {str(e)}")

    # --------------------------------------------------------------

    async def reject_worker(self, worker_id: str, body: WorkerRejectionRequest, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        if not body.reason:
            raise ValidationError("Rejection reason is required")

        try:
            result = (
                await self.supabase_client.table("worker_profiles")
                .update(
                    {
                        "approval_status": ApprovalStatus.REJECTED.value,
                        "rejection_reason": body.reason,
                        "profile_status": ProfileStatus.INACTIVE.value,
                        "updated_at": utc_now_iso(),
                    }
                )
                .eq("id", worker_id)
                .execute()
            )

            if not result.data:
                raise ProfileNotFoundError("Worker profile not found")

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=AdminActionType.REJECT_WORKER,
                target_type=AdminTargetType.WORKER_PROFILE,
                target_id=worker_id,
                target_name=body.worker_name or "Unknown",
                reason=body.reason,
            )

            logger.info(f"✅ Worker {worker_id} rejected")
            return ActionResultResponse(success=True, message="Worker profile rejected successfully")

        except Exception as e:
            logger.error(f"Error rejecting worker {worker_id}: {str(e)}")
            if isinstance(e, ProfileNotFoundError):
                raise e
            raise DatabaseError(f"Failed to reject worker profile: {str(e)}")

    # --------------------------------------------------------------

    async def apply_account_action(
        self, user_id: str, body: AccountActionRequest, allowed_actions: tuple, admin: AdminContext, meta: RequestMeta
    ) -> ActionResultResponse:
        """suspend/unsuspend or ban/unban on users.account_status"""
        if body.action not in allowed_actions:
            raise ValidationError(f'Invalid action. Use "{allowed_actions[0]}" or "{allowed_actions[1]}"')

        spec = ACCOUNT_ACTIONS[body.action]
        if spec.get("reason_required") and not body.reason:
            raise ValidationError(spec["reason_required"])

        try:
            admin_id, _ = admin.resolve_actor(body.admin_id, body.admin_email)
            at_field, by_field, reason_field = spec["fields"]
            now = utc_now_iso()

            if spec["status"] == AccountStatus.ACTIVE:
                update_data = {"account_status": AccountStatus.ACTIVE.value, at_field: None, by_field: None, reason_field: None}
            else:
                update_data = {"account_status": spec["status"].value, at_field: now, by_field: admin_id, reason_field: body.reason}
            update_data["updated_at"] = now

            result = await self.supabase_client.table("users").update(update_data).eq("id", user_id).execute()

            if not result.data:
                raise UserNotFoundError()

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=spec["audit"],
                target_type=AdminTargetType.USER,
                target_id=user_id,
                target_name=body.user_name or "Unknown",
                reason=body.reason,
            )

            logger.info(f"✅ {body.action} applied to user {user_id}")
            return ActionResultResponse(success=True, message=spec["message"])

        except Exception as e:
            logger.error(f"Error applying {body.action} to user {user_id}: {str(e)}")
            if isinstance(e, UserNotFoundError):
                raise e
            raise DatabaseError(f"Failed to {body.action} user: {str(e)}")

    async def suspend_or_unsuspend(self, user_id: str, body: AccountActionRequest, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        return await self.apply_account_action(user_id, body, ("suspend", "unsuspend"), admin, meta)

    async def ban_or_unban(self, user_id: str, body: AccountActionRequest, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        return await self.apply_account_action(user_id, body, ("ban", "unban"), admin, meta)

    # =====================================
    # OVERRIDES
    # =====================================

    async def update_admin_notes(self, user_id: str, body: AdminNotesUpdate, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        try:
            result = await self.supabase_client.table("users").update({"admin_notes": body.admin_notes, "updated_at": utc_now_iso()}).eq("id", user_id).execute()

            if not result.data:
                raise UserNotFoundError()

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=AdminActionType.UPDATE_ADMIN_NOTES,
                target_type=AdminTargetType.USER,
                target_id=user_id,
                notes=body.admin_notes,
            )

            return ActionResultResponse(success=True, message="Admin notes updated successfully")

        except Exception as e:
            logger.error(f"Error updating admin notes for {user_id}: {str(e)}")
            if isinstance(e, UserNotFoundError):
                raise e
            raise DatabaseError(f"Failed to update admin notes: {str(e)}")

    # --------------------------------------------------------------

    async def update_worker_profile(self, worker_id: str, body: AdminWorkerProfileUpdate, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        """Admin override; admin_notes is written to users, everything else to worker_profiles"""
        changes = body.model_dump(mode="json", exclude_unset=True, exclude={"admin_id", "admin_email"})
        admin_notes = changes.pop("admin_notes", None)

        if admin_notes is None and not changes:
            raise ValidationError("No fields to update")

        if admin_notes is not None:
            await self.update_admin_notes(worker_id, AdminNotesUpdate(admin_notes=admin_notes, admin_id=body.admin_id, admin_email=body.admin_email), admin, meta)

        if not changes:
            return ActionResultResponse(success=True, message="Worker updated successfully")

        if changes.get("hourly_rate") is not None:
            changes.update(daily_rate=calculate_daily_rate(changes["hourly_rate"]), monthly_rate=calculate_monthly_rate(changes["hourly_rate"]))

        try:
            result = await self.supabase_client.table("worker_profiles").update({**changes, "updated_at": utc_now_iso()}).eq("id", worker_id).execute()

            if not result.data:
                raise ProfileNotFoundError("Worker profile not found")

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=AdminActionType.UPDATE_WORKER_PROFILE,
                target_type=AdminTargetType.WORKER_PROFILE,
                target_id=worker_id,
                changes=changes,
            )

            return ActionResultResponse(success=True, message="Worker updated successfully")

        except Exception as e:
            logger.error(f"Error updating worker profile {worker_id}: {str(e)}")
            if isinstance(e, ProfileNotFoundError):
                raise e
            raise DatabaseError(f"Failed to update worker profile: {str(e)}")
