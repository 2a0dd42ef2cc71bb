from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class EmployerProfileResponse(BaseModel):
    id: str
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    country: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    website_url: Optional[str] = None
    total_jobs_posted: int = 0
    total_hires: int = 0
    is_verified: bool = False
    tax_code: Optional[str] = None
    business_license: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EmployerProfileWithUser(EmployerProfileResponse):
    email: str
    phone: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    preferred_language: Optional[str] = None


class EmployerProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    country: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    website_url: Optional[str] = None
    tax_code: Optional[str] = None
    business_license: Optional[str] = None
