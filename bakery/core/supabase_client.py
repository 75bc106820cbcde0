# bakery/core/supabase_client.py
from functools import lru_cache
from supabase import Client, ClientOptions, create_client

from bakery.core.config import get_settings


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Used only for Storage uploads/deletes of product images. Storage
    calls time out after UPLOAD_TIMEOUT_SECONDS.

    WARNING:
      - Never expose service role key to frontend.

    Raises:
        RuntimeError: if SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY are not set.
    """
    settings = get_settings()
    if not (settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY):
        raise RuntimeError(
            "Missing SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY in .env"
        )
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        options=ClientOptions(
            storage_client_timeout=settings.UPLOAD_TIMEOUT_SECONDS,
        ),
    )
