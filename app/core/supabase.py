from functools import lru_cache
from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions
from app.core.config import settings


@lru_cache
def get_supabase_client() -> Client:
    """
    Create the shared Supabase client on first use.
    """
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_KEY,
        options=ClientOptions(
            postgrest_client_timeout=settings.SUPABASE_TIMEOUT,
            storage_client_timeout=settings.SUPABASE_TIMEOUT,
            auto_refresh_token=False,
            persist_session=False,
        )
    )
