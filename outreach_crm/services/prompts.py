"""
Prompt construction for generated outreach drafts.
"""
from typing import Optional

from outreach_crm.schemas.generation import LeadData
from outreach_crm.services.integrations.base import GenerationPrompt

CHANNEL_GUIDANCE = {
    "email": "Include a subject line. Keep the body under 150 words.",
    "linkedin": "Keep it under 300 characters. No subject line.",
    "facebook": "Be concise and conversational. No subject line.",
    "instagram": "Be concise and engaging, suitable for a DM. No subject line.",
    "sms": "Keep it under 160 characters. No subject line, no links.",
}

SYSTEM_PROMPT = """You are an expert outreach specialist. Generate a personalized {channel} message that is:
- {tone} in tone
- Tailored to the {industry} industry
- Appropriate for a {message_type} message
- Personalized for {name} at {company}
- Professional, engaging and designed to get a response

{channel_guidance}"""

USER_PROMPT = """Generate a {message_type} {channel} message for:
Name: {name}
Company: {company}
Title: {title}
Industry: {industry}
{instructions}
Respond with a JSON object with exactly this structure:
{{
  "subject": "subject line (email only, otherwise null)",
  "content": "message content"
}}"""


def _readable(value: str) -> str:
    return value.replace("_", " ")


def build_prompt(
    lead: LeadData,
    channel: str,
    message_type: str,
    tone: str,
    custom_prompt: Optional[str] = None
) -> GenerationPrompt:
    """Build the system/user prompt pair for one generation request."""
    fields = {
        "name": lead.name,
        "company": lead.company or "their company",
        "title": lead.title or "unknown",
        "industry": lead.industry or "general business",
    }

    system = SYSTEM_PROMPT.format(
        channel=channel,
        tone=tone,
        message_type=_readable(message_type),
        channel_guidance=CHANNEL_GUIDANCE.get(channel, "Be concise."),
        **fields
    )

    instructions = ""
    if custom_prompt and custom_prompt.strip():
        instructions = f"\nAdditional instructions: {custom_prompt.strip()}\n"

    user = USER_PROMPT.format(
        channel=channel,
        message_type=_readable(message_type),
        instructions=instructions,
        **fields
    )

    return GenerationPrompt(
        system=system,
        user=user,
        channel=channel,
        message_type=message_type,
        lead=lead.model_dump()
    )
