"""
Outreach schemas - templates and messages.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel

from outreach_crm.models.enums import Channel, MessageType, Tone, MessageStatus


# Message Template schemas
class TemplateCreate(BaseModel):
    """
    Create a message template.
    Required fields are checked by the service so the error names the field.
    """
    name: Optional[str] = None
    channel: Optional[Channel] = None
    message_type: Optional[MessageType] = None
    tone: Tone = Tone.PROFESSIONAL
    subject_template: Optional[str] = None  # Email only
    content_template: Optional[str] = None

    class Config:
        use_enum_values = True
        validate_default = True
        json_schema_extra = {
            "example": {
                "name": "Cold Email - SaaS Founders",
                "channel": "email",
                "message_type": "cold_outreach",
                "tone": "professional",
                "subject_template": "Quick question about {{company}}'s growth strategy",
                "content_template": "Hi {{name}},\n\nI noticed {{company}} has been growing rapidly in the {{industry}} space..."
            }
        }


class TemplateUpdate(BaseModel):
    """Update a message template."""
    name: Optional[str] = None
    channel: Optional[Channel] = None
    message_type: Optional[MessageType] = None
    tone: Optional[Tone] = None
    subject_template: Optional[str] = None
    content_template: Optional[str] = None

    class Config:
        use_enum_values = True
        validate_default = True


class TemplateResponse(BaseModel):
    """Message template response."""
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    channel: str
    message_type: str
    tone: str
    subject_template: Optional[str]
    content_template: str
    variables: List[str]
    unsupported_variables: List[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TemplatePreview(BaseModel):
    """Template rendered against a lead (or the sample lead)."""
    template_id: uuid.UUID
    lead_id: Optional[uuid.UUID] = None
    subject: Optional[str] = None
    content: str


# Message schemas
class MessageCreate(BaseModel):
    """
    Create a message record.
    ``channel`` and ``content`` are required; the service rejects blanks.
    """
    lead_id: Optional[uuid.UUID] = None
    campaign_id: Optional[uuid.UUID] = None
    channel: Optional[Channel] = None
    message_type: MessageType = MessageType.COLD_OUTREACH
    subject: Optional[str] = None
    content: Optional[str] = None
    status: MessageStatus = MessageStatus.DRAFT
    ai_generated: bool = False

    class Config:
        use_enum_values = True
        validate_default = True
        json_schema_extra = {
            "example": {
                "lead_id": "550e8400-e29b-41d4-a716-446655440000",
                "channel": "linkedin",
                "message_type": "cold_outreach",
                "content": "Hi John, I'd love to connect! I saw your work at TechCorp Inc..."
            }
        }


class MessageStatusUpdate(BaseModel):
    """Manually mark a message's lifecycle status."""
    status: MessageStatus

    class Config:
        use_enum_values = True
        validate_default = True


class MessageResponse(BaseModel):
    """Message response."""
    id: uuid.UUID
    owner_id: uuid.UUID
    lead_id: Optional[uuid.UUID]
    campaign_id: Optional[uuid.UUID]
    channel: str
    message_type: str
    subject: Optional[str]
    content: str
    status: str
    ai_generated: bool
    sent_at: Optional[datetime]
    opened_at: Optional[datetime]
    replied_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MessageListItem(MessageResponse):
    """Message joined with lead and campaign display names."""
    lead_name: Optional[str] = None
    lead_company: Optional[str] = None
    campaign_name: Optional[str] = None


class MessageFilter(BaseModel):
    """Message filtering options."""
    status: Optional[MessageStatus] = None
    channel: Optional[Channel] = None
    lead_id: Optional[uuid.UUID] = None
    campaign_id: Optional[uuid.UUID] = None

    class Config:
        use_enum_values = True
        validate_default = True
