from pydantic import BaseModel, ConfigDict, Field
from typing import List
from enum import Enum


class ImageBucket(str, Enum):
    GALLERIES = "galleries"
    SERVICES = "services"


class AvatarUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    avatar_url: str = Field(..., alias="avatarUrl")
    message: str


class AdminImageUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    url: str
    file_name: str = Field(..., alias="fileName")


class ImageUploadResponse(BaseModel):
    success: bool
    urls: List[str]
