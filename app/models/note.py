"""Note domain model"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from pydantic.alias_generators import to_camel

from .category import CategorySummary
from .label import LabelSummary


class DateType(str, Enum):
    """Which timestamp a note displays"""
    CREATED = "created"
    UPDATED = "updated"


class PostLabelLink(BaseModel):
    """One row of the embedded post_labels association"""
    label: Optional[LabelSummary] = None


class NoteRecord(BaseModel):
    """Raw note row as stored in the posts table, optionally with embeds"""
    id: StrictInt
    user_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    encrypted_content: Optional[str] = None
    is_encrypted: StrictBool = False
    category_id: Optional[StrictInt] = None
    is_draft: StrictBool = False
    is_public: StrictBool = False
    public_share_token: Optional[str] = None
    is_updated: StrictBool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_autosave: Optional[datetime] = None
    category: Optional[CategorySummary] = None
    post_labels: Optional[List[PostLabelLink]] = None

    class Config:
        from_attributes = True

    def label_ids(self) -> set[int]:
        return {link.label.id for link in self.post_labels or [] if link.label is not None}


# ============================================
# Request models
# ============================================

class NoteCreateRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    encrypted_content: Optional[str] = None
    category_id: Optional[int] = None
    label_ids: Optional[List[int]] = None
    is_draft: bool = False
    is_public: bool = False
    is_encrypted: bool = False


class NoteUpdateRequest(BaseModel):
    """Note update request - only fields present in the body are written"""
    title: Optional[str] = None
    content: Optional[str] = None
    category_id: Optional[int] = None
    label_ids: Optional[List[int]] = None


class VisibilityRequest(BaseModel):
    is_public: bool


class AutosaveRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    encrypted_content: Optional[str] = None
    is_encrypted: bool = False


class NoteFilters(BaseModel):
    """Listing filters; None means "do not filter on this column" """
    category_id: Optional[int] = None
    label_ids: Optional[List[int]] = None
    search: Optional[str] = None
    is_draft: Optional[bool] = None
    is_public: Optional[bool] = None
    page: int = Field(1, ge=1)
    limit: int = Field(12, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# ============================================
# Response models
# ============================================

class NoteSummary(BaseModel):
    """List view of a note. Never carries encrypted content."""
    id: int
    user_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    is_encrypted: bool = False
    category_id: Optional[int] = None
    is_draft: bool = False
    is_public: bool = False
    public_share_token: Optional[str] = None
    is_updated: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_autosave: Optional[datetime] = None
    category: Optional[CategorySummary] = None
    labels: List[LabelSummary] = Field(default_factory=list)
    display_date: Optional[datetime] = None
    date_type: DateType


class NoteDetail(NoteSummary):
    """Single note view, encrypted content included verbatim"""
    encrypted_content: Optional[str] = None


class PublicNote(BaseModel):
    """Shared note as seen through its public token"""
    id: int
    title: Optional[str] = None
    content: Optional[str] = None
    encrypted_content: Optional[str] = None
    is_encrypted: bool = False
    is_updated: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    category: Optional[CategorySummary] = None
    labels: List[LabelSummary] = Field(default_factory=list)
    display_date: Optional[datetime] = None
    date_type: DateType


class Pagination(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class NoteListResponse(BaseModel):
    data: List[NoteSummary]
    pagination: Pagination


class VisibilityResponse(BaseModel):
    message: str
    public_share_token: Optional[str] = None
    is_public: bool


class PublishResponse(BaseModel):
    message: str
    note: NoteDetail


class AutosaveResponse(BaseModel):
    message: str
    last_autosave: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str
