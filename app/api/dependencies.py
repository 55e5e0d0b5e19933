"""Shared FastAPI dependencies for the API routers"""
from typing import AsyncIterator

from fastapi import Depends
from supabase import AsyncClient  # type: ignore

from app.infra.supabase.client import (
    close_session_client,
    create_session_client,
    get_supabase_client,
)
from app.infra.supabase.repositories import RepositoryFactory
from app.services.auth import SupabaseIdentityAuthority
from app.services.notes import NoteQueryService, NoteService


def get_repositories(client: AsyncClient = Depends(get_supabase_client)) -> RepositoryFactory:
    return RepositoryFactory(client)


def get_note_query_service(repos: RepositoryFactory = Depends(get_repositories)) -> NoteQueryService:
    return NoteQueryService(repos.notes)


def get_note_service(repos: RepositoryFactory = Depends(get_repositories)) -> NoteService:
    return NoteService(repos.notes)


async def get_session_authority() -> AsyncIterator[SupabaseIdentityAuthority]:
    """Identity authority bound to a fresh, non-persistent client for sign-in flows"""
    client = await create_session_client()
    try:
        yield SupabaseIdentityAuthority(client)
    finally:
        await close_session_client(client)
