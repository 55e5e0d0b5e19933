"""Category domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, StrictInt

DEFAULT_CATEGORY_COLOR = "#3B82F6"
DEFAULT_CATEGORY_ICON = "📁"


class CategorySummary(BaseModel):
    """Category fields embedded in a note"""
    id: StrictInt
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryCreate(BaseModel):
    """Category creation request"""
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


class Category(CategorySummary):
    """Complete category model from database"""
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Served while the categories table has not been provisioned yet
DEFAULT_CATEGORIES = [
    Category(id=1, name="Personal", color="#3B82F6", icon="👤"),
    Category(id=2, name="Work", color="#EF4444", icon="💼"),
    Category(id=3, name="Ideas", color="#8B5CF6", icon="💡"),
    Category(id=4, name="Tasks", color="#F59E0B", icon="✅"),
    Category(id=5, name="Projects", color="#10B981", icon="🚀"),
    Category(id=6, name="Learning", color="#F97316", icon="📚"),
    Category(id=7, name="Health", color="#EC4899", icon="🏥"),
    Category(id=8, name="Finance", color="#06B6D4", icon="💰"),
]
