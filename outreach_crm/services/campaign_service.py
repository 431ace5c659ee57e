"""
Campaign service - campaign management.
"""
import uuid
import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.core.exceptions import NotFoundError, ValidationError
from outreach_crm.repositories.campaign_repo import CampaignRepository
from outreach_crm.models.campaign import Campaign
from outreach_crm.models.enums import CampaignStatus
from outreach_crm.schemas.campaign import CampaignCreate, CampaignUpdate, CampaignDetail

logger = logging.getLogger(__name__)


class CampaignService:
    """Service for campaign operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.campaign_repo = CampaignRepository(session)

    async def create(self, owner_id: uuid.UUID, campaign_data: CampaignCreate) -> Campaign:
        """Create a new campaign."""
        data = campaign_data.model_dump()
        data["owner_id"] = owner_id

        campaign = await self.campaign_repo.create(data)
        if campaign.status == CampaignStatus.ACTIVE:
            campaign = await self.campaign_repo.update_status(campaign.id, CampaignStatus.ACTIVE.value)

        logger.info(f"Campaign '{campaign.name}' created ({campaign.status})")
        return campaign

    async def get(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> Campaign:
        """Get a campaign by ID."""
        campaign = await self.campaign_repo.get_owned(campaign_id, owner_id)
        if not campaign:
            raise NotFoundError("Campaign", str(campaign_id))
        return campaign

    async def get_detail(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> CampaignDetail:
        """Get a campaign with its lead and message counts."""
        campaign = await self.get(owner_id, campaign_id)
        counts = await self.campaign_repo.get_counts(campaign.id)
        return CampaignDetail(**campaign.model_dump(), **counts)

    async def list(
        self,
        owner_id: uuid.UUID,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List campaigns with optional status filter."""
        filters = {}
        if status:
            filters["status"] = status

        return await self.campaign_repo.list_paginated(
            owner_id=owner_id,
            filters=filters,
            page=page,
            limit=limit
        )

    async def update(
        self,
        owner_id: uuid.UUID,
        campaign_id: uuid.UUID,
        campaign_data: CampaignUpdate
    ) -> Campaign:
        """Update a campaign."""
        await self.get(owner_id, campaign_id)

        update_data = campaign_data.model_dump(exclude_unset=True)
        if "name" in update_data:
            if not (update_data["name"] or "").strip():
                raise ValidationError("Campaign name cannot be blank", field="name")
            update_data["name"] = update_data["name"].strip()

        return await self.campaign_repo.update(campaign_id, update_data)

    async def delete(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> bool:
        """Delete a campaign. Only drafts can be deleted."""
        campaign = await self.get(owner_id, campaign_id)

        if campaign.status != CampaignStatus.DRAFT:
            raise ValidationError("Can only delete draft campaigns", field="status")

        success = await self.campaign_repo.delete(campaign_id)
        if success:
            logger.info(f"Campaign '{campaign.name}' deleted")
        return success

    async def activate(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> Campaign:
        """Start a draft or paused campaign."""
        return await self._transition(
            owner_id, campaign_id,
            allowed=(CampaignStatus.DRAFT, CampaignStatus.PAUSED),
            target=CampaignStatus.ACTIVE
        )

    async def pause(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> Campaign:
        """Pause an active campaign."""
        return await self._transition(
            owner_id, campaign_id,
            allowed=(CampaignStatus.ACTIVE,),
            target=CampaignStatus.PAUSED
        )

    async def resume(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> Campaign:
        """Resume a paused campaign."""
        return await self._transition(
            owner_id, campaign_id,
            allowed=(CampaignStatus.PAUSED,),
            target=CampaignStatus.ACTIVE
        )

    async def complete(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> Campaign:
        """Mark an active or paused campaign as completed."""
        return await self._transition(
            owner_id, campaign_id,
            allowed=(CampaignStatus.ACTIVE, CampaignStatus.PAUSED),
            target=CampaignStatus.COMPLETED
        )

    async def _transition(
        self,
        owner_id: uuid.UUID,
        campaign_id: uuid.UUID,
        allowed: tuple,
        target: CampaignStatus
    ) -> Campaign:
        campaign = await self.get(owner_id, campaign_id)

        if campaign.status not in allowed:
            raise ValidationError(
                f"Cannot move campaign from '{campaign.status}' to '{target.value}'",
                field="status"
            )

        campaign = await self.campaign_repo.update_status(campaign_id, target.value)
        logger.info(f"Campaign '{campaign.name}' is now {target.value}")
        return campaign
