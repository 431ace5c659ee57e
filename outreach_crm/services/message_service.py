"""
Message service - the message record store.
"""
import uuid
import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.core.exceptions import NotFoundError, ValidationError
from outreach_crm.repositories.outreach_repo import MessageRepository
from outreach_crm.repositories.lead_repo import LeadRepository
from outreach_crm.repositories.campaign_repo import CampaignRepository
from outreach_crm.models.outreach import Message
from outreach_crm.models.enums import Channel, LeadStatus, MessageStatus
from outreach_crm.schemas.outreach import MessageCreate, MessageFilter

logger = logging.getLogger(__name__)


class MessageService:
    """Service for message records."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.message_repo = MessageRepository(session)
        self.lead_repo = LeadRepository(session)
        self.campaign_repo = CampaignRepository(session)

    async def create_message(
        self,
        owner_id: uuid.UUID,
        message_data: MessageCreate
    ) -> Message:
        """Create a message record. Nothing is written if validation fails."""
        if not message_data.channel:
            raise ValidationError("channel is required", field="channel")
        if not message_data.content or not message_data.content.strip():
            raise ValidationError("content is required", field="content")

        if message_data.lead_id:
            lead = await self.lead_repo.get_owned(message_data.lead_id, owner_id)
            if not lead:
                raise NotFoundError("Lead", str(message_data.lead_id))
        if message_data.campaign_id:
            campaign = await self.campaign_repo.get_owned(message_data.campaign_id, owner_id)
            if not campaign:
                raise NotFoundError("Campaign", str(message_data.campaign_id))

        data = message_data.model_dump()
        data["owner_id"] = owner_id

        # Subjects only exist on email
        if data["channel"] != Channel.EMAIL or not (data.get("subject") or "").strip():
            data["subject"] = None

        message = await self.message_repo.create(data)

        # Creating a message as already sent stamps it like a status change
        if message.status != MessageStatus.DRAFT:
            message = await self.message_repo.update_status(message.id, message.status)
            await self._mark_lead_contacted(message)

        logger.info(
            f"Message {message.id} created (channel={message.channel}, "
            f"ai_generated={message.ai_generated})"
        )
        return message

    async def list_messages(
        self,
        owner_id: uuid.UUID,
        filters: Optional[MessageFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List messages newest first with lead and campaign names."""
        return await self.message_repo.list_with_names(owner_id, filters, page, limit)

    async def get_message(self, owner_id: uuid.UUID, message_id: uuid.UUID) -> Message:
        """Get a message by ID."""
        message = await self.message_repo.get_owned(message_id, owner_id)
        if not message:
            raise NotFoundError("Message", str(message_id))
        return message

    async def update_status(
        self,
        owner_id: uuid.UUID,
        message_id: uuid.UUID,
        status: str
    ) -> Message:
        """Manually mark a message's status. Content stays as created."""
        message = await self.get_message(owner_id, message_id)
        message = await self.message_repo.update_status(message.id, status)
        await self._mark_lead_contacted(message)
        return message

    async def get_stats(self, owner_id: uuid.UUID) -> dict:
        """Message counts per status."""
        return await self.message_repo.count_by_status(owner_id)

    async def _mark_lead_contacted(self, message: Message) -> None:
        """Move a new lead to 'contacted' once a message to it is sent."""
        if not message.lead_id or message.status != MessageStatus.SENT:
            return
        lead = await self.lead_repo.get(message.lead_id)
        if lead and lead.status == LeadStatus.NEW:
            await self.lead_repo.update_status(lead.id, LeadStatus.CONTACTED.value)
