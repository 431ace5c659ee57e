"""
Closed vocabularies shared by models, schemas and services.
Stored as plain strings in the database.
"""
from enum import Enum


class Channel(str, Enum):
    EMAIL = "email"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    SMS = "sms"


class MessageType(str, Enum):
    COLD_OUTREACH = "cold_outreach"
    FOLLOW_UP = "follow_up"
    MEETING_REQUEST = "meeting_request"
    THANK_YOU = "thank_you"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    DIRECT = "direct"
    HUMOROUS = "humorous"


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    OPENED = "opened"
    REPLIED = "replied"
    MEETING = "meeting"
    QUALIFIED = "qualified"
    CLOSED = "closed"
    LOST = "lost"


class LeadSource(str, Enum):
    MANUAL = "manual"
    IMPORT = "import"
    API = "api"
    REFERRAL = "referral"
    LINKEDIN = "linkedin"
    OTHER = "other"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class MessageStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    OPENED = "opened"
    REPLIED = "replied"
    FAILED = "failed"


def values(enum_cls) -> list:
    """List the string values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
