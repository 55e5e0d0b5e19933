"""Identity domain model"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """A verified principal resolved from a bearer credential"""
    id: str
    email: Optional[str] = None
    email_verified: bool = False
    created_at: Optional[datetime] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    app_metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """full_name, then name, then the local part of the email"""
        full_name = self.user_metadata.get("full_name")
        if full_name:
            return full_name
        name = self.user_metadata.get("name")
        if name:
            return name
        if self.email:
            return self.email.split("@")[0]
        return self.id

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Identity":
        """Build an identity from a decoded Supabase JWT payload"""
        return cls(
            id=claims["sub"],
            email=claims.get("email"),
            email_verified=bool(claims.get("email_confirmed_at")),
            created_at=claims.get("created_at"),
            user_metadata=claims.get("user_metadata") or {},
            app_metadata=claims.get("app_metadata") or {},
        )

    @classmethod
    def from_auth_user(cls, user: Any) -> "Identity":
        """Build an identity from a Supabase auth User object"""
        return cls(
            id=str(user.id),
            email=user.email,
            email_verified=bool(getattr(user, "email_confirmed_at", None)),
            created_at=getattr(user, "created_at", None),
            user_metadata=getattr(user, "user_metadata", None) or {},
            app_metadata=getattr(user, "app_metadata", None) or {},
        )


class SessionTokens(BaseModel):
    """Session token shape handed back by the identity authority"""
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
