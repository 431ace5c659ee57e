"""
Leads API routes.
"""
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.database import get_session
from outreach_crm.services.lead_service import LeadService
from outreach_crm.schemas.lead import LeadCreate, LeadUpdate, LeadResponse, LeadFilter
from outreach_crm.schemas.common import PaginatedResponse
from outreach_crm.models.enums import LeadStatus, LeadSource
from outreach_crm.api.deps import get_current_user
from outreach_crm.models.user import User

router = APIRouter(prefix="/api/leads", tags=["leads"])


@router.post("/", response_model=LeadResponse, status_code=201)
async def create_lead(
    lead_data: LeadCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Create a new lead."""
    lead_service = LeadService(session)
    return await lead_service.create(current_user.id, lead_data)


@router.get("/", response_model=PaginatedResponse[LeadResponse])
async def list_leads(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[LeadStatus] = None,
    source: Optional[LeadSource] = None,
    campaign_id: Optional[uuid.UUID] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """List leads with filtering and pagination."""
    filters = LeadFilter(
        status=status,
        source=source,
        campaign_id=campaign_id,
        search=search
    )

    lead_service = LeadService(session)
    return await lead_service.list(current_user.id, filters, page, limit)


@router.get("/stats")
async def get_lead_stats(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Lead counts per status."""
    lead_service = LeadService(session)
    return await lead_service.get_status_counts(current_user.id)


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead(
    lead_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Get a lead by ID."""
    lead_service = LeadService(session)
    return await lead_service.get(current_user.id, lead_id)


@router.patch("/{lead_id}", response_model=LeadResponse)
async def update_lead(
    lead_id: uuid.UUID,
    lead_data: LeadUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Update a lead."""
    lead_service = LeadService(session)
    return await lead_service.update(current_user.id, lead_id, lead_data)
