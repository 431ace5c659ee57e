"""
Lead model - a prospective contact tracked for outreach.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Lead(SQLModel, table=True):
    """
    Lead entity - represents a potential customer/contact.
    Scoped to its owner and optionally to a campaign.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    campaign_id: Optional[uuid.UUID] = Field(default=None, foreign_key="campaign.id", index=True)

    # Basic info
    name: str = Field(index=True)
    title: Optional[str] = None
    company: Optional[str] = Field(default=None, index=True)
    industry: Optional[str] = None

    # Contact info
    email: Optional[str] = Field(default=None, index=True)
    phone: Optional[str] = None

    # Social
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_handle: Optional[str] = None

    # Lifecycle
    status: str = Field(default="new", index=True)  # new, contacted, opened, replied, meeting, qualified, closed, lost
    source: str = Field(default="manual", index=True)  # manual, import, api, referral, linkedin, other

    notes: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    last_contacted_at: Optional[datetime] = None
