from pydantic import BaseModel
from typing import List, Optional, Dict, Any
from datetime import datetime
from app.models.admin.admin_worker_models import AdminIdentity


class ClientWarningRequest(AdminIdentity):
    reason: Optional[str] = None
    client_name: Optional[str] = None


class AdminEmployerProfileUpdate(AdminIdentity):
    """Admin override of employer_profiles columns; admin_notes goes to users"""

    company_name: Optional[str] = None
    company_description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    website_url: Optional[str] = None
    is_verified: Optional[bool] = None
    tax_code: Optional[str] = None
    business_license: Optional[str] = None
    admin_notes: Optional[str] = None


class AdminClientCard(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    account_status: Optional[str] = None
    admin_notes: Optional[str] = None
    warning_count: int = 0
    created_at: Optional[datetime] = None
    employer_profile: Optional[Dict[str, Any]] = None


class AdminClientListResponse(BaseModel):
    clients: List[AdminClientCard]
    total: int
    limit: int
    offset: int


class AdminClientDetail(AdminClientCard):
    suspended_at: Optional[datetime] = None
    suspended_by: Optional[str] = None
    suspension_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    banned_by: Optional[str] = None
    ban_reason: Optional[str] = None
    updated_at: Optional[datetime] = None


class ClientBookingsResponse(BaseModel):
    bookings: List[Dict[str, Any]]
    total: int


class ClientReviewsResponse(BaseModel):
    reviews: List[Dict[str, Any]]
    total: int
