"""Domain models for the application"""
from .identity import Identity, SessionTokens
from .user import LocalUserRecord, LocalUserCreate
from .category import Category, CategoryCreate, CategorySummary, DEFAULT_CATEGORIES
from .label import Label, LabelCreate, LabelSummary, DEFAULT_LABELS
from .note import (
    NoteRecord, NoteFilters, NoteSummary, NoteDetail, PublicNote, DateType,
    NoteCreateRequest, NoteUpdateRequest, VisibilityRequest, AutosaveRequest,
    Pagination, NoteListResponse, VisibilityResponse, PublishResponse,
    AutosaveResponse, MessageResponse,
)

__all__ = [
    'Identity', 'SessionTokens',
    'LocalUserRecord', 'LocalUserCreate',
    'Category', 'CategoryCreate', 'CategorySummary', 'DEFAULT_CATEGORIES',
    'Label', 'LabelCreate', 'LabelSummary', 'DEFAULT_LABELS',
    'NoteRecord', 'NoteFilters', 'NoteSummary', 'NoteDetail', 'PublicNote', 'DateType',
    'NoteCreateRequest', 'NoteUpdateRequest', 'VisibilityRequest', 'AutosaveRequest',
    'Pagination', 'NoteListResponse', 'VisibilityResponse', 'PublishResponse',
    'AutosaveResponse', 'MessageResponse',
]
