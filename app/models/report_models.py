from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


class ReportStatus(str, Enum):
    PENDING = "pending"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ReportedType(str, Enum):
    USER = "user"
    WORKER_PROFILE = "worker_profile"
    BOOKING = "booking"
    REVIEW = "review"


class ReportAction(str, Enum):
    ASSIGN = "assign"
    UPDATE_PRIORITY = "update_priority"
    RESOLVE = "resolve"
    DISMISS = "dismiss"


class ReportCreate(BaseModel):
    """Body posted by a signed in user; reporter id and role come from the session"""

    reported_type: ReportedType
    reported_id: str
    reported_user_id: Optional[str] = None
    category: str
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    evidence_urls: List[str] = []
    priority: ReportPriority = ReportPriority.MEDIUM


class AdminReportCreate(ReportCreate):
    """Report filed from the admin panel on behalf of a user"""

    reporter_id: str


class ReportResponse(BaseModel):
    id: str
    reporter_id: str
    reporter_role: Optional[str] = None
    reported_type: str
    reported_id: str
    reported_user_id: Optional[str] = None
    category: str
    title: str
    description: str
    evidence_urls: Optional[List[str]] = None
    status: str
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    action_taken: Optional[str] = None
    warning_issued: bool = False
    account_suspended: bool = False
    account_banned: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # joins, only present on admin reads
    reporter: Optional[Dict[str, Any]] = None
    reported_user: Optional[Dict[str, Any]] = None
    assigned_admin: Optional[Dict[str, Any]] = None


class ReportListResponse(BaseModel):
    reports: List[ReportResponse]
    total: int
    limit: int
    offset: int


class ReportUpdateRequest(BaseModel):
    """PUT /admin/reports/{id}; which fields are required depends on the action"""

    action: Optional[ReportAction] = None
    admin_id: Optional[str] = None
    admin_email: Optional[str] = None
    report_title: Optional[str] = None
    assigned_to: Optional[str] = None
    priority: Optional[ReportPriority] = None
    resolution_notes: Optional[str] = None
    action_taken: Optional[str] = None
    warning_issued: bool = False
    account_suspended: bool = False
    account_banned: bool = False
    reason: Optional[str] = None


class ReportStatsResponse(BaseModel):
    total: int
    pending: int
    investigating: int
    resolved: int
    dismissed: int
    by_category: Dict[str, int]
    by_priority: Dict[str, int]
