"""
Lead schemas.
"""
import uuid
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, field_validator

from outreach_crm.models.enums import LeadStatus, LeadSource


class LeadCreate(BaseModel):
    """Create a new lead."""
    name: str
    email: Optional[EmailStr] = None
    company: Optional[str] = None
    title: Optional[str] = None
    industry: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_handle: Optional[str] = None
    status: LeadStatus = LeadStatus.NEW
    source: LeadSource = LeadSource.MANUAL
    campaign_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Lead name is required")
        return value.strip()

    class Config:
        use_enum_values = True
        validate_default = True
        json_schema_extra = {
            "example": {
                "name": "John Smith",
                "email": "john@techcorp.com",
                "company": "TechCorp Inc",
                "title": "VP of Marketing",
                "industry": "SaaS",
                "source": "referral"
            }
        }


class LeadUpdate(BaseModel):
    """Update an existing lead."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    company: Optional[str] = None
    title: Optional[str] = None
    industry: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_handle: Optional[str] = None
    status: Optional[LeadStatus] = None
    source: Optional[LeadSource] = None
    campaign_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None

    class Config:
        use_enum_values = True
        validate_default = True


class LeadResponse(BaseModel):
    """Lead response."""
    id: uuid.UUID
    owner_id: uuid.UUID
    campaign_id: Optional[uuid.UUID]
    name: str
    email: Optional[str]
    company: Optional[str]
    title: Optional[str]
    industry: Optional[str]
    phone: Optional[str]
    linkedin_url: Optional[str]
    facebook_url: Optional[str]
    instagram_handle: Optional[str]
    status: str
    source: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    last_contacted_at: Optional[datetime]

    class Config:
        from_attributes = True


class LeadFilter(BaseModel):
    """Lead filtering options."""
    status: Optional[LeadStatus] = None
    source: Optional[LeadSource] = None
    campaign_id: Optional[uuid.UUID] = None
    search: Optional[str] = None  # Search in name, email, company

    class Config:
        use_enum_values = True
        validate_default = True
