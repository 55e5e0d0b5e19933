"""Supabase client singleton"""
from typing import Optional

from supabase import AsyncClient, acreate_client  # type: ignore
from supabase.lib.client_options import AsyncClientOptions  # type: ignore

from app import config

_supabase_client: Optional[AsyncClient] = None


def _get_credentials() -> tuple[str, str]:
    url = config.SUPABASE_URL
    key = config.SUPABASE_SERVICE_ROLE_KEY

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

    return url, key


async def get_supabase_client() -> AsyncClient:
    """Get or create the service-role Supabase client singleton"""
    global _supabase_client

    if _supabase_client is None:
        url, key = _get_credentials()
        _supabase_client = await acreate_client(url, key)

    return _supabase_client


async def create_session_client() -> AsyncClient:
    """
    Create a throwaway client for sign-in flows.

    Signing in on the shared client would swap its service-role authorization
    for the user's session, so auth routes get their own non-persistent client.
    """
    url, key = _get_credentials()
    options = AsyncClientOptions(persist_session=False, auto_refresh_token=False)
    return await acreate_client(url, key, options=options)


def reset_supabase_client():
    """Reset the Supabase client singleton (useful for testing)"""
    global _supabase_client
    _supabase_client = None


async def close_session_client(client: AsyncClient) -> None:
    """Release the HTTP pool of a client made by create_session_client()"""
    await client.auth.close()
