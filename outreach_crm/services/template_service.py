"""
Template service - reusable, personalizable message templates.
"""
import uuid
import logging
from typing import Optional, List
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.core.exceptions import NotFoundError, ValidationError
from outreach_crm.repositories.outreach_repo import MessageTemplateRepository
from outreach_crm.repositories.lead_repo import LeadRepository
from outreach_crm.models.outreach import MessageTemplate
from outreach_crm.models.enums import Channel
from outreach_crm.schemas.outreach import (
    TemplateCreate, TemplateUpdate, TemplateResponse, TemplatePreview
)
from outreach_crm.services.personalization import (
    SAMPLE_LEAD, extract_variables, render, unknown_variables
)

logger = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _subject_for(channel: str, subject_template: Optional[str]) -> Optional[str]:
    """Subjects only exist on email templates."""
    if channel != Channel.EMAIL or _blank(subject_template):
        return None
    return subject_template


def to_response(template: MessageTemplate) -> TemplateResponse:
    """Template response including tokens the engine will not replace."""
    response = TemplateResponse.model_validate(template)
    response.unsupported_variables = unknown_variables(
        template.subject_template, template.content_template
    )
    return response


class TemplateService:
    """Service for message templates."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.template_repo = MessageTemplateRepository(session)
        self.lead_repo = LeadRepository(session)

    async def create_template(
        self,
        owner_id: uuid.UUID,
        template_data: TemplateCreate
    ) -> MessageTemplate:
        """Create a message template."""
        if _blank(template_data.name):
            raise ValidationError("name is required", field="name")
        if not template_data.channel:
            raise ValidationError("channel is required", field="channel")
        if not template_data.message_type:
            raise ValidationError("message_type is required", field="message_type")
        if _blank(template_data.content_template):
            raise ValidationError("content_template is required", field="content_template")

        data = template_data.model_dump()
        data["owner_id"] = owner_id
        data["name"] = data["name"].strip()
        data["subject_template"] = _subject_for(data["channel"], data["subject_template"])
        data["variables"] = extract_variables(data["subject_template"], data["content_template"])

        template = await self.template_repo.create(data)
        logger.info(f"Template {template.id} created ({template.channel})")
        return template

    async def list_templates(
        self,
        owner_id: uuid.UUID,
        channel: Optional[str] = None,
        message_type: Optional[str] = None,
        tone: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[MessageTemplate]:
        """List message templates, newest first."""
        return await self.template_repo.search(owner_id, channel, message_type, tone, search)

    async def get_template(self, owner_id: uuid.UUID, template_id: uuid.UUID) -> MessageTemplate:
        """Get a template by ID."""
        template = await self.template_repo.get_owned(template_id, owner_id)
        if not template:
            raise NotFoundError("Template", str(template_id))
        return template

    async def update_template(
        self,
        owner_id: uuid.UUID,
        template_id: uuid.UUID,
        template_data: TemplateUpdate
    ) -> MessageTemplate:
        """Update a template."""
        template = await self.get_template(owner_id, template_id)
        update_data = template_data.model_dump(exclude_unset=True)

        if "name" in update_data:
            if _blank(update_data["name"]):
                raise ValidationError("name cannot be blank", field="name")
            update_data["name"] = update_data["name"].strip()
        if "content_template" in update_data and _blank(update_data["content_template"]):
            raise ValidationError("content_template cannot be blank", field="content_template")
        for field in ("channel", "message_type", "tone"):
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"{field} cannot be empty", field=field)

        for field, value in update_data.items():
            setattr(template, field, value)

        # Applied last so a channel change away from email drops the subject
        template.subject_template = _subject_for(template.channel, template.subject_template)
        template.variables = extract_variables(template.subject_template, template.content_template)
        template.updated_at = datetime.utcnow()

        return await self.template_repo.save(template)

    async def delete_template(self, owner_id: uuid.UUID, template_id: uuid.UUID) -> bool:
        """Delete a template."""
        template = await self.get_template(owner_id, template_id)
        deleted = await self.template_repo.delete(template.id)
        logger.info(f"Template {template_id} deleted")
        return deleted

    async def duplicate_template(
        self,
        owner_id: uuid.UUID,
        template_id: uuid.UUID
    ) -> MessageTemplate:
        """Copy a template under the name '<name> (Copy)'."""
        template = await self.get_template(owner_id, template_id)
        return await self.template_repo.create({
            "owner_id": owner_id,
            "name": f"{template.name} (Copy)",
            "channel": template.channel,
            "message_type": template.message_type,
            "tone": template.tone,
            "subject_template": template.subject_template,
            "content_template": template.content_template,
            "variables": list(template.variables or []),
        })

    async def preview_template(
        self,
        owner_id: uuid.UUID,
        template_id: uuid.UUID,
        lead_id: Optional[uuid.UUID] = None
    ) -> TemplatePreview:
        """Render a template against a lead, or the sample lead."""
        template = await self.get_template(owner_id, template_id)

        lead = SAMPLE_LEAD
        if lead_id:
            lead = await self.lead_repo.get_owned(lead_id, owner_id)
            if not lead:
                raise NotFoundError("Lead", str(lead_id))

        rendered = render(template.subject_template, template.content_template, lead)
        return TemplatePreview(
            template_id=template.id,
            lead_id=lead_id,
            subject=rendered.subject,
            content=rendered.content
        )

    async def get_stats(self, owner_id: uuid.UUID) -> dict:
        """Template counts per channel."""
        counts = await self.template_repo.count_by_channel(owner_id)
        counts["total"] = sum(counts.values())
        return counts
