from pydantic import BaseModel
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


class AdminActionType(str, Enum):
    APPROVE_WORKER = "approve_worker"
    REJECT_WORKER = "reject_worker"
    SUSPEND_USER = "suspend_user"
    UNSUSPEND_USER = "unsuspend_user"
    BAN_USER = "ban_user"
    UNBAN_USER = "unban_user"
    ISSUE_WARNING = "issue_warning"
    ASSIGN_REPORT = "assign_report"
    RESOLVE_REPORT = "resolve_report"
    DISMISS_REPORT = "dismiss_report"
    UPDATE_BOOKING_STATUS = "update_booking_status"
    UPDATE_WORKER_PROFILE = "update_worker_profile"
    UPDATE_EMPLOYER_PROFILE = "update_employer_profile"
    UPDATE_ADMIN_NOTES = "update_admin_notes"
    UPDATE_SETTINGS = "update_settings"


class AdminTargetType(str, Enum):
    WORKER_PROFILE = "worker_profile"
    EMPLOYER_PROFILE = "employer_profile"
    USER = "user"
    REPORT = "report"
    BOOKING = "booking"
    SETTINGS = "settings"


# =====================================
# Audit log
# =====================================


class AdminActionCreate(BaseModel):
    """One append-only audit entry"""

    admin_id: str
    admin_email: str
    action_type: AdminActionType
    target_type: AdminTargetType
    target_id: str
    target_name: Optional[str] = None
    changes: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class AdminActionResponse(BaseModel):
    id: str
    admin_id: str
    admin_email: str
    action_type: str
    target_type: str
    target_id: str
    target_name: Optional[str] = None
    changes: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
    admin: Optional[Dict[str, Any]] = None


class AdminActionListResponse(BaseModel):
    actions: List[AdminActionResponse]
    total: int
    limit: int
    offset: int


class AdminActivitySummaryResponse(BaseModel):
    total_actions: int
    actions_by_type: Dict[str, int]
    recent_actions: List[AdminActionResponse]


class RequestMeta(BaseModel):
    """Where an admin request came from, copied onto audit entries"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# =====================================
# Shared
# =====================================


class ActionResultResponse(BaseModel):
    success: bool
    message: str
