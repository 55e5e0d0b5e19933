"""Local user record domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, StrictBool


class LocalUserBase(BaseModel):
    """Base local user fields"""
    email: Optional[str] = None
    name: str
    email_verified: StrictBool = False


class LocalUserCreate(LocalUserBase):
    """Local user creation model"""
    id: str  # mirrors the identity id (UUID as string)
    created_at: datetime


class LocalUserRecord(LocalUserBase):
    """Complete local user record from database"""
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
