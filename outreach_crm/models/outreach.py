"""
Outreach models - messages and templates.
"""
import uuid
from datetime import datetime
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column

from outreach_crm.models.campaign import JSONList


class MessageTemplate(SQLModel, table=True):
    """
    Template for outreach messages.
    Supports {{name}}, {{company}}, {{title}} and {{industry}} placeholders.
    """
    __tablename__ = "message_template"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)

    # Template info
    name: str = Field(index=True)
    channel: str = Field(index=True)  # email, linkedin, facebook, instagram, sms
    message_type: str = Field(index=True)  # cold_outreach, follow_up, meeting_request, thank_you
    tone: str = Field(default="professional")  # professional, friendly, direct, humorous
    subject_template: Optional[str] = None  # Email only
    content_template: str

    # Variables referenced in subject/content (e.g., ["company", "name"])
    variables: List[str] = Field(default_factory=list, sa_column=Column(JSONList))

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Message(SQLModel, table=True):
    """
    A produced outreach message.
    Created from a template or an AI draft once the user confirms it.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    lead_id: Optional[uuid.UUID] = Field(default=None, foreign_key="lead.id", index=True)
    campaign_id: Optional[uuid.UUID] = Field(default=None, foreign_key="campaign.id", index=True)

    # Message content
    channel: str = Field(index=True)
    message_type: str
    subject: Optional[str] = None  # Email only
    content: str

    status: str = Field(default="draft", index=True)  # draft, sent, opened, replied, failed
    ai_generated: bool = Field(default=False)

    # Lifecycle
    sent_at: Optional[datetime] = None
    opened_at: Optional[datetime] = None
    replied_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
