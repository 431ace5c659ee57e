"""
Draft generation API routes.
"""
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.database import get_session
from outreach_crm.services.draft_service import DraftService
from outreach_crm.schemas.generation import (
    DraftRequest, DraftResponse, GenerateMessageRequest, GeneratedMessage, SaveDraftRequest
)
from outreach_crm.schemas.outreach import MessageResponse
from outreach_crm.api.deps import get_current_user
from outreach_crm.models.user import User

router = APIRouter(prefix="/api", tags=["drafts"])


@router.post("/generate-message", response_model=GeneratedMessage)
async def generate_message(
    request: GenerateMessageRequest,
    current_user: User = Depends(get_current_user)
):
    """Generate a personalized message for a lead. Nothing is stored."""
    draft_service = DraftService()
    return await draft_service.generate_message(request)


@router.post("/drafts", response_model=DraftResponse)
async def create_draft(
    request: DraftRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Draft a message from a template or the text-generation provider."""
    draft_service = DraftService(session)
    return await draft_service.generate(current_user.id, request)


@router.post("/drafts/save", response_model=MessageResponse, status_code=201)
async def save_draft(
    draft: SaveDraftRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Store a confirmed draft as a message."""
    draft_service = DraftService(session)
    return await draft_service.save(current_user.id, draft)
