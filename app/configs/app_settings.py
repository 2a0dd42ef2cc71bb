from pydantic_settings import BaseSettings
from typing import Optional, List

# BaseSettings from pydantic-settings pulls values from the system environment first, then from the .env file, then falls back to the defaults below.


class Settings(BaseSettings):
    # Supabase (service role key, server side only)
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_TIMEOUT_SECONDS: int = 20

    # Shared secret accepted by admin routes as a service credential (x-admin-secret header)
    # leave unset to only allow admin sessions
    ADMIN_SECRET: Optional[str] = None

    # API Settings
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["*"]

    # Locales
    DEFAULT_LOCALE: str = "vi"
    SUPPORTED_LOCALES: List[str] = ["en", "vi", "zh", "ko"]

    # Resend API Key (notifications are skipped when missing)
    RESEND_API_KEY: Optional[str] = None
    EMAIL_FROM: str = "MarketPlace <noreply@marketplace.local>"
    ADMIN_NOTIFICATION_EMAIL: Optional[str] = None

    # domains
    CLIENT_DOMAIN: str = "http://127.0.0.1:3000"

    LOG_LEVEL: str = "INFO"

    class Config:
        # pydantic looks for ".env" relative to the working directory of the python process.
        # In production there is no .env file and everything comes from the deployment environment.
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# module level singleton: the module body runs once per process, every "from app.configs.app_settings import settings" shares this instance
settings = Settings()
