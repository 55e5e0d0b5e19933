"""Label domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, StrictInt

DEFAULT_LABEL_COLOR = "#10B981"


class LabelSummary(BaseModel):
    """Label fields embedded in a note"""
    id: StrictInt
    name: str
    color: Optional[str] = None


class LabelCreate(BaseModel):
    """Label creation request"""
    name: str
    color: Optional[str] = None


class Label(LabelSummary):
    """Complete label model from database"""
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


DEFAULT_LABELS = [
    Label(id=1, name="Important", color="#EF4444"),
    Label(id=2, name="Urgent", color="#F59E0B"),
    Label(id=3, name="Review", color="#8B5CF6"),
    Label(id=4, name="Archive", color="#6B7280"),
    Label(id=5, name="Draft", color="#10B981"),
    Label(id=6, name="In Progress", color="#3B82F6"),
    Label(id=7, name="Completed", color="#059669"),
    Label(id=8, name="On Hold", color="#DC2626"),
]
