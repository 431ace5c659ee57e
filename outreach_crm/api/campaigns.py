"""
Campaigns API routes.
"""
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.database import get_session
from outreach_crm.services.campaign_service import CampaignService
from outreach_crm.schemas.campaign import (
    CampaignCreate, CampaignUpdate, CampaignResponse, CampaignDetail
)
from outreach_crm.schemas.common import PaginatedResponse
from outreach_crm.models.enums import CampaignStatus
from outreach_crm.api.deps import get_current_user
from outreach_crm.models.user import User

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.post("/", response_model=CampaignResponse, status_code=201)
async def create_campaign(
    campaign_data: CampaignCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Create a new campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.create(current_user.id, campaign_data)


@router.get("/", response_model=PaginatedResponse[CampaignResponse])
async def list_campaigns(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[CampaignStatus] = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """List campaigns."""
    campaign_service = CampaignService(session)
    return await campaign_service.list(
        current_user.id,
        status.value if status else None,
        page,
        limit
    )


@router.get("/{campaign_id}", response_model=CampaignDetail)
async def get_campaign(
    campaign_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Get a campaign with its lead and message counts."""
    campaign_service = CampaignService(session)
    return await campaign_service.get_detail(current_user.id, campaign_id)


@router.patch("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: uuid.UUID,
    campaign_data: CampaignUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Update a campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.update(current_user.id, campaign_id, campaign_data)


@router.delete("/{campaign_id}", status_code=204)
async def delete_campaign(
    campaign_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Delete a draft campaign."""
    campaign_service = CampaignService(session)
    await campaign_service.delete(current_user.id, campaign_id)


@router.post("/{campaign_id}/activate", response_model=CampaignResponse)
async def activate_campaign(
    campaign_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Start a draft or paused campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.activate(current_user.id, campaign_id)


@router.post("/{campaign_id}/pause", response_model=CampaignResponse)
async def pause_campaign(
    campaign_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Pause an active campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.pause(current_user.id, campaign_id)


@router.post("/{campaign_id}/resume", response_model=CampaignResponse)
async def resume_campaign(
    campaign_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Resume a paused campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.resume(current_user.id, campaign_id)


@router.post("/{campaign_id}/complete", response_model=CampaignResponse)
async def complete_campaign(
    campaign_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Mark a campaign as completed."""
    campaign_service = CampaignService(session)
    return await campaign_service.complete(current_user.id, campaign_id)
