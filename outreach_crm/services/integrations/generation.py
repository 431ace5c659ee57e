"""
Text-generation provider implementations.
OpenAI and Gemini for real drafts, a mock provider for development.
"""
import json
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError
from openai import AsyncOpenAI, OpenAIError

from outreach_crm.config import settings
from outreach_crm.core.exceptions import GenerationUnavailableError
from outreach_crm.services.integrations.base import GenerationPrompt, TextGenerationProvider

logger = logging.getLogger(__name__)


class OpenAIGenerationProvider(TextGenerationProvider):
    """OpenAI chat completions with JSON output."""

    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini"):
        # One attempt per request; the SDK would otherwise retry failed calls
        self.client = AsyncOpenAI(
            api_key=api_key,
            timeout=settings.AI_TIMEOUT_SECONDS,
            max_retries=0
        )
        self.model = model

    async def complete(self, prompt: GenerationPrompt) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.user}
                ],
                response_format={"type": "json_object"},
                temperature=settings.AI_TEMPERATURE,
                max_tokens=settings.AI_MAX_TOKENS
            )
        except OpenAIError as e:
            logger.error(f"OpenAI generation failed: {e}")
            raise GenerationUnavailableError(str(e), provider="OpenAI") from e

        if not response.choices or not response.choices[0].message.content:
            raise GenerationUnavailableError("empty response", provider="OpenAI")
        return response.choices[0].message.content


class GeminiGenerationProvider(TextGenerationProvider):
    """Google Gemini with a JSON response mime type."""

    name = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        genai.configure(api_key=api_key)
        self.model = model

    async def complete(self, prompt: GenerationPrompt) -> str:
        model = genai.GenerativeModel(
            self.model,
            system_instruction=prompt.system,
            generation_config=genai.GenerationConfig(
                temperature=settings.AI_TEMPERATURE,
                max_output_tokens=settings.AI_MAX_TOKENS,
                response_mime_type="application/json"
            )
        )
        try:
            response = await model.generate_content_async(
                prompt.user,
                request_options={"timeout": settings.AI_TIMEOUT_SECONDS, "retry": None}
            )
            # .text raises ValueError when the candidate was blocked
            text = response.text
        except (GoogleAPIError, ValueError) as e:
            logger.error(f"Gemini generation failed: {e}")
            raise GenerationUnavailableError(str(e), provider="Gemini") from e

        if not text:
            raise GenerationUnavailableError("empty response", provider="Gemini")
        return text


class MockGenerationProvider(TextGenerationProvider):
    """
    Mock provider for development/testing.
    Writes a fixed-shape draft from the lead data, no network.
    """

    name = "mock"

    async def complete(self, prompt: GenerationPrompt) -> str:
        lead = prompt.lead
        name = lead.get("name") or "there"
        company = lead.get("company") or "your company"
        industry = lead.get("industry") or "your"

        if prompt.channel == "email":
            return json.dumps({
                "subject": f"Quick question about {company}'s growth strategy",
                "content": (
                    f"Hi {name},\n\n"
                    f"I came across {company} and was impressed by your recent work in the "
                    f"{industry} space.\n\n"
                    "Would you be open to a quick 15-minute call this week?\n\n"
                    "Best regards,\n[Your Name]"
                )
            })

        return json.dumps({
            "subject": None,
            "content": (
                f"Hi {name}, I noticed your work at {company} in the {industry} space. "
                "Would love to connect and share a few ideas."
            )
        })


class UnconfiguredGenerationProvider(TextGenerationProvider):
    """Stand-in when no provider key is set outside DEV_MODE."""

    name = "unconfigured"

    async def complete(self, prompt: GenerationPrompt) -> str:
        raise GenerationUnavailableError("no text-generation provider is configured")


def build_generation_provider(provider: Optional[str] = None) -> TextGenerationProvider:
    """Create the provider selected by settings.AI_PROVIDER."""
    choice = (provider or settings.AI_PROVIDER).lower()

    if choice == "auto":
        if settings.GEMINI_API_KEY:
            choice = "gemini"
        elif settings.OPENAI_API_KEY:
            choice = "openai"
        elif settings.DEV_MODE:
            choice = "mock"
        else:
            choice = "unconfigured"

    if choice == "gemini" and settings.GEMINI_API_KEY:
        return GeminiGenerationProvider(settings.GEMINI_API_KEY, settings.GEMINI_MODEL)
    if choice == "openai" and settings.OPENAI_API_KEY:
        return OpenAIGenerationProvider(settings.OPENAI_API_KEY, settings.OPENAI_MODEL)
    if choice == "mock":
        return MockGenerationProvider()

    logger.warning(f"Text-generation provider '{choice}' is not available")
    return UnconfiguredGenerationProvider()


# Provider factory
_current_provider: Optional[TextGenerationProvider] = None


def get_generation_provider() -> TextGenerationProvider:
    """Get the current text-generation provider instance."""
    global _current_provider
    if _current_provider is None:
        _current_provider = build_generation_provider()
        logger.info(f"Message generation using '{_current_provider.name}' provider")
    return _current_provider


def set_generation_provider(provider: Optional[TextGenerationProvider]) -> None:
    """Set the provider (for testing or switching providers); None resets it."""
    global _current_provider
    _current_provider = provider
