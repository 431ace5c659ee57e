"""
Message template API routes.
"""
import uuid
from typing import Optional, List
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.database import get_session
from outreach_crm.services.template_service import TemplateService, to_response
from outreach_crm.schemas.outreach import (
    TemplateCreate, TemplateUpdate, TemplateResponse, TemplatePreview
)
from outreach_crm.models.enums import Channel, MessageType, Tone
from outreach_crm.api.deps import get_current_user
from outreach_crm.models.user import User

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.post("/", response_model=TemplateResponse, status_code=201)
async def create_template(
    template_data: TemplateCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Create a message template."""
    template_service = TemplateService(session)
    template = await template_service.create_template(current_user.id, template_data)
    return to_response(template)


@router.get("/", response_model=List[TemplateResponse])
async def list_templates(
    channel: Optional[Channel] = None,
    message_type: Optional[MessageType] = None,
    tone: Optional[Tone] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """List message templates."""
    template_service = TemplateService(session)
    templates = await template_service.list_templates(
        current_user.id,
        channel=channel.value if channel else None,
        message_type=message_type.value if message_type else None,
        tone=tone.value if tone else None,
        search=search
    )
    return [to_response(t) for t in templates]


@router.get("/stats")
async def get_template_stats(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Template counts per channel."""
    template_service = TemplateService(session)
    return await template_service.get_stats(current_user.id)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Get a template by ID."""
    template_service = TemplateService(session)
    template = await template_service.get_template(current_user.id, template_id)
    return to_response(template)


@router.patch("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: uuid.UUID,
    template_data: TemplateUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Update a template."""
    template_service = TemplateService(session)
    template = await template_service.update_template(current_user.id, template_id, template_data)
    return to_response(template)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Delete a template."""
    template_service = TemplateService(session)
    await template_service.delete_template(current_user.id, template_id)


@router.post("/{template_id}/duplicate", response_model=TemplateResponse, status_code=201)
async def duplicate_template(
    template_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Copy a template."""
    template_service = TemplateService(session)
    template = await template_service.duplicate_template(current_user.id, template_id)
    return to_response(template)


@router.get("/{template_id}/preview", response_model=TemplatePreview)
async def preview_template(
    template_id: uuid.UUID,
    lead_id: Optional[uuid.UUID] = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Render a template against a lead, or sample data when no lead is given."""
    template_service = TemplateService(session)
    return await template_service.preview_template(current_user.id, template_id, lead_id)
