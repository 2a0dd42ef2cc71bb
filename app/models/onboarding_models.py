from pydantic import BaseModel
from typing import Optional, List, Dict, Union
from enum import Enum


class ServiceType(str, Enum):
    ASSISTANCE = "assistance"
    COMPANIONSHIP = "companionship"


class AssistanceCategory(str, Enum):
    PERSONAL_ASSIST = "personal_assist"
    PROFESSIONAL_ONSITE_ASSIST = "professional_onsite_assist"
    VIRTUAL_ASSIST = "virtual_assist"
    TOUR_GUIDE = "tour_guide"
    TRANSLATOR = "translator"


class ZodiacSign(str, Enum):
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


class Currency(str, Enum):
    USD = "USD"
    VND = "VND"
    EUR = "EUR"
    JPY = "JPY"
    KRW = "KRW"
    CNY = "CNY"


class OnboardingStep(int, Enum):
    PERSONAL_INFO = 1
    SERVICE_AND_GALLERY = 2
    PRICING = 3


# values written to worker_profiles.setup_step once step 3 is done
SETUP_STEP_COMPLETED = 4

DEFAULT_MIN_BOOKING_HOURS = 2
MIN_GALLERY_IMAGES = 3
MAX_GALLERY_IMAGES = 10
MAX_SERVICE_IMAGES = 5
COMPANIONSHIP_LEVELS = (1, 2, 3)


# -------------------------------------------------------------------------------------------
# Pricing
# -------------------------------------------------------------------------------------------


class ServicePricing(BaseModel):
    hourly_rate: float
    daily_rate: float
    monthly_rate: float
    min_booking_hours: int = DEFAULT_MIN_BOOKING_HOURS


class ServicePricingInput(BaseModel):
    # kept loose on purpose so a blank form field becomes our validation message instead of a 422
    hourly_rate: Optional[Union[float, str]] = None
    min_booking_hours: int = DEFAULT_MIN_BOOKING_HOURS


class PricingPreviewRequest(BaseModel):
    service_pricing: Dict[str, ServicePricingInput] = {}


class PricingPreviewResponse(BaseModel):
    service_pricing: Dict[str, ServicePricing]


# -------------------------------------------------------------------------------------------
# Step payloads
# -------------------------------------------------------------------------------------------


class PersonalInfoStep(BaseModel):
    full_name: str = ""
    age: Optional[Union[int, float, str]] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    zodiac_sign: Optional[ZodiacSign] = None
    hobbies: List[str] = []
    lifestyle: Optional[str] = None
    favorite_quote: Optional[str] = None
    introduction: Optional[str] = None
    skills: List[str] = []
    experience: Optional[str] = None  # stored as worker_profiles.bio
    available: bool = True


class ServiceGalleryStep(BaseModel):
    gallery_images: List[str] = []
    service_type: Optional[str] = None
    service_categories: List[AssistanceCategory] = []
    service_level: Optional[int] = None
    service_languages: List[str] = []


class PricingStep(BaseModel):
    currency: Currency = Currency.USD
    service_pricing: Dict[str, ServicePricingInput] = {}
    service_images: List[str] = []
    # companionship uses a single flat rate
    hourly_rate: Optional[Union[float, str]] = None
    min_booking_hours: int = DEFAULT_MIN_BOOKING_HOURS


# -------------------------------------------------------------------------------------------
# Responses
# -------------------------------------------------------------------------------------------


class PricingState(BaseModel):
    currency: Currency = Currency.USD
    service_pricing: Dict[str, ServicePricing] = {}
    service_images: List[str] = []
    hourly_rate: Optional[float] = None
    min_booking_hours: int = DEFAULT_MIN_BOOKING_HOURS


class OnboardingStateResponse(BaseModel):
    current_step: int
    setup_completed: bool
    personal_info: PersonalInfoStep
    service_gallery: ServiceGalleryStep
    pricing: PricingState


class StepSubmitResponse(BaseModel):
    success: bool
    current_step: int
    setup_completed: bool = False
    redirect_to: Optional[str] = None
