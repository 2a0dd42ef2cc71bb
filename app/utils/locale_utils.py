from fastapi import Request
from app.configs.app_settings import settings
from typing import Optional


def detect_locale(explicit: Optional[str] = None, cookie_locale: Optional[str] = None, accept_language: Optional[str] = None) -> str:
    """Pick the locale used for redirect paths: explicit value, NEXT_LOCALE cookie, Accept-Language, default"""
    supported = settings.SUPPORTED_LOCALES

    if explicit and explicit in supported:
        return explicit

    if cookie_locale and cookie_locale in supported:
        return cookie_locale

    # header order is the client's preference order; q values are not re-sorted
    for language_range in (accept_language or "").lower().split(","):
        primary = language_range.split(";")[0].strip().split("-")[0]
        if primary in supported:
            return primary

    return settings.DEFAULT_LOCALE


def get_request_locale(request: Request, locale: Optional[str] = None) -> str:
    return detect_locale(locale, request.cookies.get("NEXT_LOCALE"), request.headers.get("accept-language"))


def localized_path(locale: str, path: str = "") -> str:
    return f"/{locale}{path}"
