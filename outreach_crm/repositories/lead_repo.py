"""
Lead repository with search.
"""
import uuid
from typing import Optional
from datetime import datetime

from sqlmodel import select, or_, func
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.models.lead import Lead
from outreach_crm.models.enums import LeadStatus, values
from outreach_crm.repositories.base import BaseRepository
from outreach_crm.schemas.lead import LeadFilter
from outreach_crm.core.pagination import paginate_query


class LeadRepository(BaseRepository[Lead]):
    """Repository for Lead operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Lead, session)

    async def search(
        self,
        owner_id: uuid.UUID,
        filters: Optional[LeadFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """Search leads with filtering."""
        query = select(Lead).where(Lead.owner_id == owner_id)

        if filters:
            if filters.status:
                query = query.where(Lead.status == filters.status)
            if filters.source:
                query = query.where(Lead.source == filters.source)
            if filters.campaign_id:
                query = query.where(Lead.campaign_id == filters.campaign_id)
            if filters.search:
                search_term = f"%{filters.search.lower()}%"
                query = query.where(
                    or_(
                        func.lower(Lead.name).like(search_term),
                        func.lower(Lead.email).like(search_term),
                        func.lower(Lead.company).like(search_term)
                    )
                )

        query = query.order_by(Lead.created_at.desc())
        return await paginate_query(self.session, query, page, limit)

    async def update_status(self, lead_id: uuid.UUID, status: str) -> Optional[Lead]:
        """Update lead status, stamping first contact."""
        lead = await self.get(lead_id)
        if not lead:
            return None
        lead.status = status
        lead.updated_at = datetime.utcnow()
        if status == LeadStatus.CONTACTED:
            lead.last_contacted_at = datetime.utcnow()
        return await self.save(lead)

    async def count_by_status(self, owner_id: uuid.UUID) -> dict:
        """Count leads per status, including zero counts."""
        query = (
            select(Lead.status, func.count())
            .where(Lead.owner_id == owner_id)
            .group_by(Lead.status)
        )
        result = await self.session.exec(query)
        counts = {status: 0 for status in values(LeadStatus)}
        for status, count in result.all():
            counts[status] = count
        counts["all"] = sum(counts.values())
        return counts
