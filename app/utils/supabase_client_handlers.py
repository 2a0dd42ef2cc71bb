from supabase import acreate_client, AsyncClient
from supabase.lib.client_options import AsyncClientOptions
from app.configs.app_settings import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# One AsyncClient per process, built in the lifespan and handed to routes through get_supabase_client.
# It authenticates with the service role key: row level security does not apply, so every ownership check
# (own profile, admin only routes) has to happen in the services and dependencies.

_supabase_client: Optional[AsyncClient] = None


async def create_supabase_client() -> AsyncClient:
    """Build the shared client on startup; later calls return the existing one"""
    global _supabase_client
    if _supabase_client is None:
        options = AsyncClientOptions(
            postgrest_client_timeout=settings.SUPABASE_TIMEOUT_SECONDS,
            storage_client_timeout=settings.SUPABASE_TIMEOUT_SECONDS,
        )
        _supabase_client = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_KEY, options=options)
        logger.info(f"Supabase client created for {settings.SUPABASE_URL}")
    return _supabase_client


async def get_supabase_client() -> AsyncClient:
    """Request dependency; tests override it with an in-memory double"""
    if _supabase_client is None:
        raise RuntimeError("Supabase client not initialized. Call create_supabase_client() during startup.")
    return _supabase_client


async def close_supabase_client():
    global _supabase_client
    if _supabase_client is not None:
        # the async client keeps no pool of its own to close; the http sessions go with the reference
        _supabase_client = None
