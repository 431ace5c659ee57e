"""
User model.
Every other record is owned by exactly one user.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    User model with authentication and profile info.
    Profile fields mirror the account settings shown in the app header.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Auth
    email: str = Field(unique=True, index=True)
    password_hash: str

    # Profile
    display_name: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    avatar_url: Optional[str] = None

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    last_login_at: Optional[datetime] = None
