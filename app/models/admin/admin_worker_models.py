from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ProfileStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


# =====================================
# Request bodies
# =====================================


class AdminIdentity(BaseModel):
    """Acting admin, only read when the request is authenticated with the admin secret"""

    admin_id: Optional[str] = None
    admin_email: Optional[str] = None


class WorkerApprovalRequest(AdminIdentity):
    worker_name: Optional[str] = None


class WorkerRejectionRequest(AdminIdentity):
    reason: Optional[str] = None
    worker_name: Optional[str] = None


class AccountActionRequest(AdminIdentity):
    """Body of suspend/unsuspend and ban/unban"""

    action: str
    reason: Optional[str] = None
    user_name: Optional[str] = None


class AdminNotesUpdate(AdminIdentity):
    admin_notes: str


class AdminWorkerProfileUpdate(AdminIdentity):
    """Admin override of worker_profiles columns, only the fields sent are written"""

    bio: Optional[str] = None
    service_description: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None
    is_verified: Optional[bool] = None
    available: Optional[bool] = None
    profile_status: Optional[ProfileStatus] = None
    approval_status: Optional[ApprovalStatus] = None
    hourly_rate: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    admin_notes: Optional[str] = None


# =====================================
# Responses
# =====================================


class AdminWorkerCard(BaseModel):
    """Row of the admin worker table"""

    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    account_status: Optional[str] = None
    created_at: Optional[datetime] = None
    worker_profile: Optional[Dict[str, Any]] = None


class AdminWorkerListResponse(BaseModel):
    workers: List[AdminWorkerCard]
    total: int
    limit: int
    offset: int


class AdminWorkerDetail(AdminWorkerCard):
    suspended_at: Optional[datetime] = None
    suspended_by: Optional[str] = None
    suspension_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    banned_by: Optional[str] = None
    ban_reason: Optional[str] = None
    admin_notes: Optional[str] = None
    warning_count: int = 0
    updated_at: Optional[datetime] = None
