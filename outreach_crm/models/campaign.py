"""
Campaign model - a named grouping of leads and messages.
"""
import uuid
from datetime import datetime
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


class Campaign(SQLModel, table=True):
    """
    Campaign entity.
    Owns leads and messages by reference; channels keep the order the user picked.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)

    # Basic info
    name: str = Field(index=True)
    description: Optional[str] = None
    target_audience: Optional[str] = None

    status: str = Field(default="draft", index=True)  # draft, active, paused, completed

    # e.g. ["email", "linkedin"]
    channels: List[str] = Field(default_factory=list, sa_column=Column(JSONList))

    # Lifecycle timestamps
    started_at: Optional[datetime] = None
    paused_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
