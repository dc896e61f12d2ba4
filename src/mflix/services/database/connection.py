"""Supabase database connection management."""

from functools import lru_cache

from supabase import Client, create_client

from src.mflix.config import settings


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Shared Supabase client authenticated with the anon key, subject to RLS."""
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """
    Shared Supabase client authenticated with the service role key.

    The user store runs on this client unless use_admin_client is disabled:
    users and sessions rows are written only by server-side code, so the
    store does not go through RLS.
    """
    return create_client(settings.supabase_url, settings.supabase_service_role_key)
