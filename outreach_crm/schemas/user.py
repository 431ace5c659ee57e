"""
User schemas.
"""
import uuid
from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class UserResponse(BaseModel):
    """User details response."""
    id: uuid.UUID
    email: str
    display_name: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Update user profile."""
    display_name: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    avatar_url: Optional[str] = None
