"""
Campaign repository.
"""
import uuid
from typing import Optional
from datetime import datetime

from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.models.campaign import Campaign
from outreach_crm.models.lead import Lead
from outreach_crm.models.outreach import Message
from outreach_crm.models.enums import CampaignStatus
from outreach_crm.repositories.base import BaseRepository


class CampaignRepository(BaseRepository[Campaign]):
    """Repository for Campaign operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Campaign, session)

    async def update_status(self, campaign_id: uuid.UUID, status: str) -> Optional[Campaign]:
        """Update campaign status with appropriate timestamps."""
        campaign = await self.get(campaign_id)
        if not campaign:
            return None

        now = datetime.utcnow()
        campaign.status = status
        campaign.updated_at = now

        if status == CampaignStatus.ACTIVE:
            if not campaign.started_at:
                campaign.started_at = now
            campaign.paused_at = None
        elif status == CampaignStatus.PAUSED:
            campaign.paused_at = now
        elif status == CampaignStatus.COMPLETED:
            campaign.completed_at = now

        return await self.save(campaign)

    async def get_counts(self, campaign_id: uuid.UUID) -> dict:
        """Count the leads and messages referencing a campaign."""
        leads = await self.session.exec(
            select(func.count()).select_from(Lead).where(Lead.campaign_id == campaign_id)
        )
        messages = await self.session.exec(
            select(func.count()).select_from(Message).where(Message.campaign_id == campaign_id)
        )
        return {"leads_count": leads.one(), "messages_count": messages.one()}
