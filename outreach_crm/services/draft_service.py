"""
Draft generation service.

A draft comes from one of two strategies per request:

* template - personalize a stored template, no external call;
* generator - ask the text-generation provider for a new message.

Drafts are never stored here; saving is a separate, explicit step.
"""
import json
import re
import uuid
import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.core.exceptions import NotFoundError, ValidationError
from outreach_crm.repositories.outreach_repo import MessageTemplateRepository
from outreach_crm.repositories.lead_repo import LeadRepository
from outreach_crm.models.outreach import Message
from outreach_crm.models.enums import Channel
from outreach_crm.schemas.generation import (
    DraftRequest, DraftResponse, GenerateMessageRequest, GeneratedMessage,
    LeadData, SaveDraftRequest
)
from outreach_crm.schemas.outreach import MessageCreate
from outreach_crm.services.integrations.base import TextGenerationProvider
from outreach_crm.services.integrations.generation import get_generation_provider
from outreach_crm.services.message_service import MessageService
from outreach_crm.services.personalization import render
from outreach_crm.services.prompts import build_prompt

logger = logging.getLogger(__name__)

CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def fallback_subject(company: Optional[str]) -> str:
    """Subject used when the provider's email output had none we could read."""
    return f"Quick question about {company or 'your company'}"


def parse_generation_output(
    raw: Optional[str],
    channel: str,
    company: Optional[str] = None
) -> GeneratedMessage:
    """
    Normalize provider output to a subject/content pair.

    A JSON object with a string ``content`` is used as is. Anything else is
    treated as plain text: it becomes the content, and email drafts get a
    fallback subject naming the company. Never raises.
    """
    text = raw if isinstance(raw, str) else ""
    candidate = text.strip()
    fenced = CODE_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group(1)

    try:
        data = json.loads(candidate)
    except (ValueError, TypeError):
        data = None

    if isinstance(data, dict) and isinstance(data.get("content"), str):
        subject = data.get("subject")
        if not isinstance(subject, str) or not subject.strip():
            subject = None
        return GeneratedMessage(subject=subject, content=data["content"])

    logger.warning(f"Provider output was not the expected JSON shape; using raw text ({channel})")
    return GeneratedMessage(
        subject=fallback_subject(company) if channel == Channel.EMAIL else None,
        content=text
    )


class DraftService:
    """Service producing draft messages."""

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        provider: Optional[TextGenerationProvider] = None
    ):
        self.session = session
        self._provider = provider
        if session is not None:
            self.template_repo = MessageTemplateRepository(session)
            self.lead_repo = LeadRepository(session)

    @property
    def provider(self) -> TextGenerationProvider:
        return self._provider or get_generation_provider()

    async def generate(self, owner_id: uuid.UUID, request: DraftRequest) -> DraftResponse:
        """Produce a draft using the strategy the request asks for."""
        strategy = self._resolve_strategy(request)
        lead = await self._resolve_lead(owner_id, request)

        if strategy == "template":
            return await self._from_template(owner_id, request, lead)

        generated = await self.generate_with_provider(
            lead,
            request.channel,
            request.message_type,
            request.tone,
            request.custom_prompt
        )
        return DraftResponse(
            subject=generated.subject,
            content=generated.content,
            channel=request.channel,
            message_type=request.message_type,
            tone=request.tone,
            strategy="generator",
            ai_generated=True,
            lead_id=request.lead_id
        )

    async def generate_message(self, request: GenerateMessageRequest) -> GeneratedMessage:
        """Generator-backed draft for the standalone generation endpoint."""
        return await self.generate_with_provider(
            request.lead_data,
            request.channel,
            request.message_type,
            request.tone,
            request.custom_prompt
        )

    async def generate_with_provider(
        self,
        lead: LeadData,
        channel: str,
        message_type: str,
        tone: str,
        custom_prompt: Optional[str] = None
    ) -> GeneratedMessage:
        """
        Ask the provider for a new message.

        Raises GenerationUnavailableError when the provider fails; output
        that is not the expected JSON degrades to the raw text.
        """
        prompt = build_prompt(lead, channel, message_type, tone, custom_prompt)
        provider = self.provider

        raw = await provider.complete(prompt)

        logger.info(f"Generated {channel} draft via {provider.name} ({message_type}, {tone})")
        return parse_generation_output(raw, channel, lead.company)

    async def save(self, owner_id: uuid.UUID, draft: SaveDraftRequest) -> Message:
        """Store a draft the user confirmed."""
        message_service = MessageService(self.session)
        return await message_service.create_message(
            owner_id,
            MessageCreate(**draft.model_dump())
        )

    def _resolve_strategy(self, request: DraftRequest) -> str:
        if request.strategy == "template":
            if not request.template_id:
                raise ValidationError("template_id is required for template drafts", field="template_id")
            return "template"
        if request.strategy == "generator":
            if request.template_id:
                raise ValidationError(
                    "template_id cannot be combined with generator drafts", field="template_id"
                )
            return "generator"
        return "template" if request.template_id else "generator"

    async def _resolve_lead(self, owner_id: uuid.UUID, request: DraftRequest) -> LeadData:
        if request.lead_id:
            lead = await self.lead_repo.get_owned(request.lead_id, owner_id)
            if not lead:
                raise NotFoundError("Lead", str(request.lead_id))
            return LeadData(
                name=lead.name,
                company=lead.company,
                title=lead.title,
                industry=lead.industry
            )
        if request.lead is None:
            raise ValidationError("lead or lead_id is required", field="lead")
        return request.lead

    async def _from_template(
        self,
        owner_id: uuid.UUID,
        request: DraftRequest,
        lead: LeadData
    ) -> DraftResponse:
        template = await self.template_repo.get_owned(request.template_id, owner_id)
        if not template:
            raise NotFoundError("Template", str(request.template_id))

        rendered = render(template.subject_template, template.content_template, lead)
        return DraftResponse(
            subject=rendered.subject,
            content=rendered.content,
            channel=template.channel,
            message_type=template.message_type,
            tone=template.tone,
            strategy="template",
            ai_generated=False,
            template_id=template.id,
            lead_id=request.lead_id
        )
