from app.models.admin.admin_client_models import (
    ClientWarningRequest,
    AdminEmployerProfileUpdate,
    AdminClientCard,
    AdminClientListResponse,
    AdminClientDetail,
    ClientBookingsResponse,
    ClientReviewsResponse,
)
from app.models.admin.admin_worker_models import AdminNotesUpdate
from app.models.admin.admin_action_models import AdminActionType, AdminTargetType, RequestMeta, ActionResultResponse
from app.models.user_models import UserRole, AccountStatus
from app.services.admin.admin_worker_services import AdminWorkerService
from app.utils.query_helpers import utc_now_iso, first_embedded
from app.utils.admin_auth import AdminContext
from app.custom_error import UserNotFoundError, ProfileNotFoundError, ValidationError, DatabaseError, ServerError
from typing import Optional
import logging

logger = logging.getLogger(__name__)

EMPLOYER_PROFILE_COLUMNS = (
    "company_name, company_description, industry, company_size, city, district, country, address, company_phone, company_email, "
    "website_url, total_jobs_posted, total_hires, is_verified, verified_at, tax_code, business_license, created_at, updated_at"
)


class AdminClientService(AdminWorkerService):
    """Employers ("clients" in the admin panel); reuses the account level helpers of the worker service"""

    # =====================================
    # LISTING
    # =====================================

    async def get_clients(
        self,
        account_status: Optional[AccountStatus] = None,
        verified: Optional[bool] = None,
        city: Optional[str] = None,
        industry: Optional[str] = None,
        company_size: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> AdminClientListResponse:
        try:
            profile_filters = {"is_verified": verified, "city": city, "industry": industry, "company_size": company_size}
            profile_filters = {key: value for key, value in profile_filters.items() if value is not None}

            embed = "employer_profiles!inner" if profile_filters else "employer_profiles"
            query = (
                self.supabase_client.table("users")
                .select(
                    f"id, email, full_name, avatar_url, phone, account_status, admin_notes, warning_count, created_at, {embed}({EMPLOYER_PROFILE_COLUMNS})",
                    count="exact",
                )
                .eq("role", UserRole.EMPLOYER.value)
            )

            for column, value in profile_filters.items():
                query = query.eq(f"employer_profiles.{column}", value)
            if account_status:
                query = query.eq("account_status", account_status.value)
            if search:
                query = query.or_(f"full_name.ilike.%{search}%,email.ilike.%{search}%")

            result = await query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()

            clients = []
            for row in result.data or []:
                employer_profile = first_embedded(row, "employer_profiles")
                row["warning_count"] = row.get("warning_count") or 0
                clients.append(AdminClientCard(**row, employer_profile=employer_profile))

            return AdminClientListResponse(clients=clients, total=result.count or 0, limit=limit, offset=offset)

        except Exception as e:
            logger.error(f"Error fetching clients: {str(e)}")
            raise ServerError(f"Failed to fetch clients: {str(e)}")

    # --------------------------------------------------------------

    async def get_client(self, client_id: str) -> AdminClientDetail:
        try:
            result = (
                await self.supabase_client.table("users")
                .select(
                    "id, email, full_name, avatar_url, phone, account_status, suspended_at, suspended_by, suspension_reason, "
                    "banned_at, banned_by, ban_reason, admin_notes, warning_count, created_at, updated_at, "
                    f"employer_profiles({EMPLOYER_PROFILE_COLUMNS})"
                )
                .eq("id", client_id)
                .eq("role", UserRole.EMPLOYER.value)
                .limit(1)
                .execute()
            )

            if not result.data:
                raise UserNotFoundError()

            row = result.data[0]
            employer_profile = first_embedded(row, "employer_profiles")
            row["warning_count"] = row.get("warning_count") or 0
            return AdminClientDetail(**row, employer_profile=employer_profile)

        except Exception as e:
            logger.error(f"Error fetching client {client_id}: {str(e)}")
            if isinstance(e, UserNotFoundError):
                raise e
            raise ServerError(f"Failed to fetch client: {str(e)}")

    # --------------------------------------------------------------

    async def get_client_bookings(self, client_id: str, limit: int = 50, offset: int = 0) -> ClientBookingsResponse:
        try:
            result = (
                await self.supabase_client.table("bookings")
                .select(
                    "id, worker_id, service_type, start_date, end_date, total_hours, hourly_rate, total_amount, currency, status, "
                    "created_at, updated_at, workers:users!worker_id(id, full_name, avatar_url, email)",
                    count="exact",
                )
                .eq("employer_id", client_id)
                .order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )

            return ClientBookingsResponse(bookings=result.data or [], total=result.count or 0)

        except Exception as e:
            logger.error(f"Error fetching bookings of client {client_id}: {str(e)}")
            raise ServerError(f"Failed to fetch client bookings: {str(e)}")

    # --------------------------------------------------------------

    async def get_client_reviews(self, client_id: str, limit: int = 50, offset: int = 0) -> ClientReviewsResponse:
        try:
            result = (
                await self.supabase_client.table("reviews")
                .select(
                    "id, worker_id, rating, title, comment, images, is_verified_purchase, is_hidden, hidden_at, hidden_by, hidden_reason, "
                    "created_at, updated_at, workers:users!worker_id(id, full_name, avatar_url)",
                    count="exact",
                )
                .eq("employer_id", client_id)
                .order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )

            return ClientReviewsResponse(reviews=result.data or [], total=result.count or 0)

        except Exception as e:
            logger.error(f"Error fetching reviews of client {client_id}: {str(e)}")
            raise ServerError(f"Failed to fetch client reviews: {str(e)}")

    # =====================================
    # MODERATION
    # =====================================

    async def issue_warning(self, client_id: str, body: ClientWarningRequest, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        """Bump warning_count and prepend the reason to admin_notes"""
        if not body.reason:
            raise ValidationError("Warning reason is required")

        try:
            user_result = await self.supabase_client.table("users").select("warning_count, admin_notes").eq("id", client_id).limit(1).execute()

            if not user_result.data:
                raise UserNotFoundError()

            user = user_result.data[0]
            warning_count = (user.get("warning_count") or 0) + 1
            admin_notes = f"Warning {warning_count}: {body.reason}"
            if user.get("admin_notes"):
                admin_notes = f"{admin_notes}\n\n{user['admin_notes']}"

            await self.supabase_client.table("users").update(
                {
                    "warning_count": warning_count,
                    "admin_notes": admin_notes,
                    "updated_at": utc_now_iso(),
                }
            ).eq("id", client_id).execute()

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=AdminActionType.ISSUE_WARNING,
                target_type=AdminTargetType.USER,
                target_id=client_id,
                target_name=body.client_name or "Unknown",
                reason=body.reason,
                notes=f"Issued warning: {body.reason}",
            )

            logger.info(f"✅ Warning {warning_count} issued to client {client_id}")
            return ActionResultResponse(success=True, message="Warning issued successfully")

        except Exception as e:
            logger.error(f"Error issuing warning to client {client_id}: {str(e)}")
            if isinstance(e, UserNotFoundError):
                raise e
            raise DatabaseError(f"Failed to issue warning: {str(e)}")

    # --------------------------------------------------------------

    async def update_client(self, client_id: str, body: AdminEmployerProfileUpdate, admin: AdminContext, meta: RequestMeta) -> ActionResultResponse:
        """admin_notes goes to users, the rest overrides employer_profiles"""
        changes = body.model_dump(mode="json", exclude_unset=True, exclude={"admin_id", "admin_email"})
        admin_notes = changes.pop("admin_notes", None)

        if admin_notes is None and not changes:
            raise ValidationError("No fields to update")

        if admin_notes is not None:
            await self.update_admin_notes(client_id, AdminNotesUpdate(admin_notes=admin_notes, admin_id=body.admin_id, admin_email=body.admin_email), admin, meta)

        if not changes:
            return ActionResultResponse(success=True, message="Client updated successfully")

        try:
            result = await self.supabase_client.table("employer_profiles").update({**changes, "updated_at": utc_now_iso()}).eq("id", client_id).execute()

            if not result.data:
                raise ProfileNotFoundError("Employer profile not found")

            await self._audit(
                admin,
                body.admin_id,
                body.admin_email,
                meta,
                action_type=AdminActionType.UPDATE_EMPLOYER_PROFILE,
                target_type=AdminTargetType.EMPLOYER_PROFILE,
                target_id=client_id,
                changes=changes,
            )

            return ActionResultResponse(success=True, message="Client updated successfully")

        except Exception as e:
            logger.error(f"Error updating client {client_id}: {str(e)}")
            if isinstance(e, ProfileNotFoundError):
                raise e
            raise DatabaseError(f"Failed to update employer profile: {str(e)}")
