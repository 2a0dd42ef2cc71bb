from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class FooterLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    url: str
    locale: Optional[str] = None


class AdminSettingsSnapshot(BaseModel):
    """
    The single admin_settings row as read at the start of a request.
    Frozen: a write goes through AdminSettingsService.update_settings and a fresh snapshot is read back.
    """

    model_config = ConfigDict(frozen=True)

    id: str

    # SEO
    site_title: Optional[str] = None
    site_description: Optional[str] = None
    site_keywords: Optional[str] = None
    og_image_url: Optional[str] = None

    # Logo & branding
    logo_url: Optional[str] = None
    logo_text: Optional[str] = None
    favicon_url: Optional[str] = None

    # Header
    header_bg_color: Optional[str] = None
    header_text_color: Optional[str] = None
    show_language_switcher: bool = True
    show_theme_toggle: bool = True

    # Footer
    footer_enabled: bool = True
    footer_text: Optional[str] = None
    footer_bg_color: Optional[str] = None
    footer_text_color: Optional[str] = None

    # Contact
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_address: Optional[str] = None

    # Social
    social_facebook: Optional[str] = None
    social_twitter: Optional[str] = None
    social_instagram: Optional[str] = None
    social_linkedin: Optional[str] = None
    social_youtube: Optional[str] = None

    # Legal
    terms_url: Optional[str] = None
    privacy_url: Optional[str] = None
    about_url: Optional[str] = None

    custom_footer_links: List[FooterLink] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class AdminSettingsUpdate(BaseModel):
    """Partial update, keys that are not sent keep their stored value"""

    site_title: Optional[str] = None
    site_description: Optional[str] = None
    site_keywords: Optional[str] = None
    og_image_url: Optional[str] = None
    logo_url: Optional[str] = None
    logo_text: Optional[str] = None
    favicon_url: Optional[str] = None
    header_bg_color: Optional[str] = None
    header_text_color: Optional[str] = None
    show_language_switcher: Optional[bool] = None
    show_theme_toggle: Optional[bool] = None
    footer_enabled: Optional[bool] = None
    footer_text: Optional[str] = None
    footer_bg_color: Optional[str] = None
    footer_text_color: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_address: Optional[str] = None
    social_facebook: Optional[str] = None
    social_twitter: Optional[str] = None
    social_instagram: Optional[str] = None
    social_linkedin: Optional[str] = None
    social_youtube: Optional[str] = None
    terms_url: Optional[str] = None
    privacy_url: Optional[str] = None
    about_url: Optional[str] = None
    custom_footer_links: Optional[List[FooterLink]] = None


class AdminSettingsUpdateResponse(BaseModel):
    success: bool
    message: str
    settings: AdminSettingsSnapshot
