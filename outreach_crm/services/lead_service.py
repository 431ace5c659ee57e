"""
Lead service - lead management.
"""
import uuid
import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.core.exceptions import NotFoundError
from outreach_crm.repositories.lead_repo import LeadRepository
from outreach_crm.repositories.campaign_repo import CampaignRepository
from outreach_crm.models.lead import Lead
from outreach_crm.schemas.lead import LeadCreate, LeadUpdate, LeadFilter

logger = logging.getLogger(__name__)


class LeadService:
    """Service for lead operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.lead_repo = LeadRepository(session)
        self.campaign_repo = CampaignRepository(session)

    async def create(self, owner_id: uuid.UUID, lead_data: LeadCreate) -> Lead:
        """Create a new lead."""
        if lead_data.campaign_id:
            await self._check_campaign(owner_id, lead_data.campaign_id)

        data = lead_data.model_dump()
        data["owner_id"] = owner_id

        lead = await self.lead_repo.create(data)
        logger.info(f"Lead {lead.id} created (source={lead.source})")
        return lead

    async def get(self, owner_id: uuid.UUID, lead_id: uuid.UUID) -> Lead:
        """Get a lead by ID."""
        lead = await self.lead_repo.get_owned(lead_id, owner_id)
        if not lead:
            raise NotFoundError("Lead", str(lead_id))
        return lead

    async def list(
        self,
        owner_id: uuid.UUID,
        filters: Optional[LeadFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List leads with filtering and pagination."""
        return await self.lead_repo.search(owner_id, filters, page, limit)

    async def update(
        self,
        owner_id: uuid.UUID,
        lead_id: uuid.UUID,
        lead_data: LeadUpdate
    ) -> Lead:
        """Update a lead."""
        await self.get(owner_id, lead_id)

        update_data = lead_data.model_dump(exclude_unset=True)
        if update_data.get("campaign_id"):
            await self._check_campaign(owner_id, update_data["campaign_id"])
        if "name" in update_data and not (update_data["name"] or "").strip():
            update_data.pop("name")

        return await self.lead_repo.update(lead_id, update_data)

    async def get_status_counts(self, owner_id: uuid.UUID) -> dict:
        """Lead counts per status, plus 'all'."""
        return await self.lead_repo.count_by_status(owner_id)

    async def _check_campaign(self, owner_id: uuid.UUID, campaign_id: uuid.UUID) -> None:
        campaign = await self.campaign_repo.get_owned(campaign_id, owner_id)
        if not campaign:
            raise NotFoundError("Campaign", str(campaign_id))
