"""Supabase client factory for database and storage operations."""

from functools import lru_cache

from supabase import Client, create_client

from src.core.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client for database and storage operations.

    Uses the secret key, which bypasses RLS at the PostgREST level. Every
    caller must have verified authorization before touching a row.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )
