"""
Message record API routes.
"""
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.database import get_session
from outreach_crm.services.message_service import MessageService
from outreach_crm.schemas.outreach import (
    MessageCreate, MessageResponse, MessageListItem, MessageStatusUpdate, MessageFilter
)
from outreach_crm.schemas.common import PaginatedResponse
from outreach_crm.models.enums import Channel, MessageStatus
from outreach_crm.api.deps import get_current_user
from outreach_crm.models.user import User

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("/", response_model=MessageResponse, status_code=201)
async def create_message(
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Record a message."""
    message_service = MessageService(session)
    return await message_service.create_message(current_user.id, message_data)


@router.get("/", response_model=PaginatedResponse[MessageListItem])
async def list_messages(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[MessageStatus] = None,
    channel: Optional[Channel] = None,
    lead_id: Optional[uuid.UUID] = None,
    campaign_id: Optional[uuid.UUID] = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """List messages, newest first, with lead and campaign names."""
    filters = MessageFilter(
        status=status,
        channel=channel,
        lead_id=lead_id,
        campaign_id=campaign_id
    )

    message_service = MessageService(session)
    return await message_service.list_messages(current_user.id, filters, page, limit)


@router.get("/stats")
async def get_message_stats(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Message counts per status."""
    message_service = MessageService(session)
    return await message_service.get_stats(current_user.id)


@router.get("/{message_id}", response_model=MessageResponse)
async def get_message(
    message_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Get a message by ID."""
    message_service = MessageService(session)
    return await message_service.get_message(current_user.id, message_id)


@router.patch("/{message_id}/status", response_model=MessageResponse)
async def update_message_status(
    message_id: uuid.UUID,
    update: MessageStatusUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Mark a message as sent, opened, replied, etc."""
    message_service = MessageService(session)
    return await message_service.update_status(current_user.id, message_id, update.status)
