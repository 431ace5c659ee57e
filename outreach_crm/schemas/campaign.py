"""
Campaign schemas.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, field_validator

from outreach_crm.models.enums import Channel, CampaignStatus


def _distinct_channels(channels: Optional[List[Channel]]) -> Optional[List[Channel]]:
    """Drop repeated channels, keeping first-seen order."""
    if channels is None:
        return None
    seen = []
    for channel in channels:
        if channel not in seen:
            seen.append(channel)
    return seen


class CampaignCreate(BaseModel):
    """Create a new campaign."""
    name: str
    description: Optional[str] = None
    target_audience: Optional[str] = None
    status: CampaignStatus = CampaignStatus.DRAFT
    channels: List[Channel] = []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Campaign name is required")
        return value.strip()

    @field_validator("channels")
    @classmethod
    def unique_channels(cls, value: List[Channel]) -> List[Channel]:
        return _distinct_channels(value)

    class Config:
        use_enum_values = True
        validate_default = True
        json_schema_extra = {
            "example": {
                "name": "SaaS Founder Outreach Q1",
                "description": "Cold outreach to seed-stage founders",
                "target_audience": "Founders of B2B SaaS companies, 10-50 employees",
                "channels": ["email", "linkedin"]
            }
        }


class CampaignUpdate(BaseModel):
    """Update an existing campaign."""
    name: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    channels: Optional[List[Channel]] = None

    @field_validator("channels")
    @classmethod
    def unique_channels(cls, value: Optional[List[Channel]]) -> Optional[List[Channel]]:
        return _distinct_channels(value)

    class Config:
        use_enum_values = True
        validate_default = True


class CampaignResponse(BaseModel):
    """Campaign response."""
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: Optional[str]
    target_audience: Optional[str]
    status: str
    channels: List[str]
    started_at: Optional[datetime]
    paused_at: Optional[datetime]
    completed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CampaignDetail(CampaignResponse):
    """Campaign with counts of the leads and messages it owns."""
    leads_count: int = 0
    messages_count: int = 0
