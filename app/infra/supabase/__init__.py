"""Supabase infrastructure module"""
from .client import create_session_client, get_supabase_client, reset_supabase_client
from .errors import (
    RelationshipUnresolvedError,
    SchemaNotReadyError,
    StoreError,
    classify_api_error,
)

__all__ = [
    'get_supabase_client',
    'create_session_client',
    'reset_supabase_client',
    'StoreError',
    'SchemaNotReadyError',
    'RelationshipUnresolvedError',
    'classify_api_error',
]
