"""
Draft generation schemas.
"""
import uuid
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from outreach_crm.models.enums import Channel, MessageType, Tone, MessageStatus

Strategy = Literal["template", "generator"]


class LeadData(BaseModel):
    """Lead attributes used for personalization."""
    name: str
    company: Optional[str] = None
    title: Optional[str] = None
    industry: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("lead name is required")
        return value.strip()


class DraftRequest(BaseModel):
    """
    Request a draft message for a lead.

    Supply ``template_id`` to personalize a stored template, or leave it out
    to have the text-generation provider write a new message. Lead attributes
    come inline (``lead``) or from a stored lead (``lead_id``).
    """
    lead: Optional[LeadData] = None
    lead_id: Optional[uuid.UUID] = None
    channel: Channel = Channel.EMAIL
    message_type: MessageType = MessageType.COLD_OUTREACH
    tone: Tone = Tone.PROFESSIONAL
    custom_prompt: Optional[str] = None
    template_id: Optional[uuid.UUID] = None
    strategy: Optional[Strategy] = None

    class Config:
        use_enum_values = True
        validate_default = True
        json_schema_extra = {
            "example": {
                "lead": {
                    "name": "John Smith",
                    "company": "TechCorp Inc",
                    "title": "VP of Marketing",
                    "industry": "SaaS"
                },
                "channel": "email",
                "message_type": "cold_outreach",
                "tone": "professional",
                "custom_prompt": "Mention our Q3 case study"
            }
        }


class DraftResponse(BaseModel):
    """A candidate message; nothing is stored until it is saved."""
    subject: Optional[str] = None
    content: str
    channel: Channel
    message_type: MessageType
    tone: Tone
    strategy: Strategy
    ai_generated: bool
    template_id: Optional[uuid.UUID] = None
    lead_id: Optional[uuid.UUID] = None

    class Config:
        use_enum_values = True
        validate_default = True


class SaveDraftRequest(BaseModel):
    """Persist a confirmed draft as a message."""
    lead_id: Optional[uuid.UUID] = None
    campaign_id: Optional[uuid.UUID] = None
    channel: Channel
    message_type: MessageType
    subject: Optional[str] = None
    content: Optional[str] = None
    ai_generated: bool = False
    status: MessageStatus = MessageStatus.DRAFT

    class Config:
        use_enum_values = True
        validate_default = True


# Wire format of the standalone generation endpoint (camelCase)
class GenerateMessageRequest(BaseModel):
    """Generator-backed draft request."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    lead_data: LeadData = Field(alias="leadData")
    channel: Channel
    message_type: str = Field(alias="messageType", min_length=1)
    tone: Tone
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")


class GeneratedMessage(BaseModel):
    """Generated subject/content pair."""
    subject: Optional[str] = None
    content: str
