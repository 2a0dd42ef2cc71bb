from pydantic import BaseModel
from typing import Optional, List, Dict
from datetime import datetime
from app.models.onboarding_models import ServicePricing, ServicePricingInput, Currency, ZodiacSign, AssistanceCategory


class WorkerProfileResponse(BaseModel):
    id: str
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    experience_years: Optional[int] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    country: Optional[str] = None
    portfolio_images: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    available: Optional[bool] = None
    total_jobs: int = 0
    completed_jobs: int = 0
    rating: Optional[float] = None
    total_reviews: int = 0
    is_verified: bool = False

    # onboarding personal info
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    zodiac_sign: Optional[str] = None
    hobbies: Optional[List[str]] = None
    lifestyle: Optional[str] = None
    favorite_quote: Optional[str] = None
    introduction: Optional[str] = None

    # service selection
    service_type: Optional[str] = None
    service_category: Optional[str] = None  # legacy single category column
    service_categories: Optional[List[str]] = None
    service_level: Optional[int] = None
    service_description: Optional[str] = None
    service_languages: Optional[List[str]] = None

    gallery_images: Optional[List[str]] = None
    service_images: Optional[List[str]] = None

    # pricing
    currency: Optional[str] = None
    hourly_rate: Optional[float] = None
    daily_rate: Optional[float] = None
    monthly_rate: Optional[float] = None
    min_booking_hours: Optional[int] = None
    service_pricing: Optional[Dict[str, ServicePricing]] = None

    # moderation
    approval_status: Optional[str] = None
    profile_status: Optional[str] = None

    setup_step: Optional[int] = None
    setup_completed: bool = False

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkerProfileWithUser(WorkerProfileResponse):
    email: str
    phone: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    preferred_language: Optional[str] = None


class WorkerProfileUpdate(BaseModel):
    """Post-onboarding edit form; only the fields sent are written"""

    full_name: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    experience_years: Optional[int] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    available: Optional[bool] = None
    languages: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    zodiac_sign: Optional[ZodiacSign] = None
    hobbies: Optional[List[str]] = None
    lifestyle: Optional[str] = None
    favorite_quote: Optional[str] = None
    introduction: Optional[str] = None
    service_description: Optional[str] = None
    service_categories: Optional[List[AssistanceCategory]] = None
    service_languages: Optional[List[str]] = None
    gallery_images: Optional[List[str]] = None
    service_images: Optional[List[str]] = None
    currency: Optional[Currency] = None
    service_pricing: Optional[Dict[str, ServicePricingInput]] = None
    facebook_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None


class ProfileCompletionResponse(BaseModel):
    role: str
    completion_percent: int
