"""Note listing, commands and view shaping"""
from .note_query_service import NoteQueryService, build_pagination, filter_by_labels
from .note_service import NoteNotFoundError, NoteService, generate_share_token
from .note_transformer import resolve_display_date, to_detail, to_list_item, to_public

__all__ = [
    "NoteQueryService",
    "NoteService",
    "NoteNotFoundError",
    "build_pagination",
    "filter_by_labels",
    "generate_share_token",
    "resolve_display_date",
    "to_detail",
    "to_list_item",
    "to_public",
]
