from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    WORKER = "worker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"


class SessionUser(BaseModel):
    """Auth user resolved from a Supabase access token"""

    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}


class UserProfileCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # camelCase keys are what the registration page posts
    user_id: str = Field(..., alias="userId")
    email: EmailStr
    role: str
    phone: Optional[str] = None
    preferred_language: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: str
    role: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    preferred_language: Optional[str] = None
    account_status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserProfileSaveResponse(BaseModel):
    success: bool
    message: str
    user: UserResponse


class UserExistsResponse(BaseModel):
    exists: bool
    user: Optional[UserResponse] = None


class AuthCallbackRequest(BaseModel):
    role: Optional[str] = None
    locale: Optional[str] = None


class AuthCallbackResponse(BaseModel):
    status: str  # "success" | "error"
    message: str
    redirect_to: str
    user: Optional[UserResponse] = None
