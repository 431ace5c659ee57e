"""
Outreach repository for messages and templates.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from sqlmodel import select, or_, func
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.models.outreach import Message, MessageTemplate
from outreach_crm.models.lead import Lead
from outreach_crm.models.campaign import Campaign
from outreach_crm.models.enums import Channel, MessageStatus, values
from outreach_crm.repositories.base import BaseRepository
from outreach_crm.schemas.outreach import MessageFilter
from outreach_crm.core.pagination import count_query, create_paginated_response


class MessageRepository(BaseRepository[Message]):
    """Repository for Message operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Message, session)

    async def list_with_names(
        self,
        owner_id: uuid.UUID,
        filters: Optional[MessageFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """
        List messages newest first, joined with lead and campaign names.
        Items are dicts so the display names travel with each row.
        """
        query = (
            select(
                Message,
                Lead.name.label("lead_name"),
                Lead.company.label("lead_company"),
                Campaign.name.label("campaign_name")
            )
            .outerjoin(Lead, Message.lead_id == Lead.id)
            .outerjoin(Campaign, Message.campaign_id == Campaign.id)
            .where(Message.owner_id == owner_id)
        )

        if filters:
            if filters.status:
                query = query.where(Message.status == filters.status)
            if filters.channel:
                query = query.where(Message.channel == filters.channel)
            if filters.lead_id:
                query = query.where(Message.lead_id == filters.lead_id)
            if filters.campaign_id:
                query = query.where(Message.campaign_id == filters.campaign_id)

        total = await count_query(self.session, query)

        query = query.order_by(Message.created_at.desc())
        query = query.offset((page - 1) * limit).limit(limit)
        result = await self.session.exec(query)

        items = []
        for message, lead_name, lead_company, campaign_name in result.all():
            row = message.model_dump()
            row.update({
                "lead_name": lead_name,
                "lead_company": lead_company,
                "campaign_name": campaign_name,
            })
            items.append(row)

        return create_paginated_response(items, total, page, limit)

    async def update_status(self, message_id: uuid.UUID, status: str) -> Optional[Message]:
        """Update message status with appropriate timestamps."""
        message = await self.get(message_id)
        if not message:
            return None

        now = datetime.utcnow()
        message.status = status
        message.updated_at = now

        if status == MessageStatus.SENT:
            message.sent_at = message.sent_at or now
        elif status == MessageStatus.OPENED:
            message.opened_at = message.opened_at or now
        elif status == MessageStatus.REPLIED:
            message.replied_at = message.replied_at or now

        return await self.save(message)

    async def count_by_status(self, owner_id: uuid.UUID) -> dict:
        """Count messages by status."""
        counts = {}
        for status in values(MessageStatus):
            counts[status] = await self.count(owner_id, {"status": status})
        return counts


class MessageTemplateRepository(BaseRepository[MessageTemplate]):
    """Repository for MessageTemplate operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(MessageTemplate, session)

    async def search(
        self,
        owner_id: uuid.UUID,
        channel: Optional[str] = None,
        message_type: Optional[str] = None,
        tone: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[MessageTemplate]:
        """List templates with filters, newest first."""
        query = select(MessageTemplate).where(MessageTemplate.owner_id == owner_id)

        if channel:
            query = query.where(MessageTemplate.channel == channel)
        if message_type:
            query = query.where(MessageTemplate.message_type == message_type)
        if tone:
            query = query.where(MessageTemplate.tone == tone)
        if search:
            term = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(MessageTemplate.name).like(term),
                    func.lower(MessageTemplate.content_template).like(term)
                )
            )

        query = query.order_by(MessageTemplate.created_at.desc())
        result = await self.session.exec(query)
        return result.all()

    async def count_by_channel(self, owner_id: uuid.UUID) -> dict:
        """Count templates per channel."""
        query = (
            select(MessageTemplate.channel, func.count())
            .where(MessageTemplate.owner_id == owner_id)
            .group_by(MessageTemplate.channel)
        )
        result = await self.session.exec(query)
        counts = {channel: 0 for channel in values(Channel)}
        for channel, count in result.all():
            counts[channel] = count
        return counts
