"""Test text-generation providers, provider selection and prompt construction."""

import json

import google.generativeai as genai
import httpx
import pytest
from google.api_core.exceptions import InternalServerError, ServiceUnavailable

from outreach_crm.config import settings
from outreach_crm.core.exceptions import GenerationUnavailableError
from outreach_crm.schemas.generation import LeadData
from outreach_crm.services.integrations.generation import (
    GeminiGenerationProvider,
    MockGenerationProvider,
    OpenAIGenerationProvider,
    UnconfiguredGenerationProvider,
    build_generation_provider,
)
from outreach_crm.services.prompts import build_prompt


class TestProviderSelection:
    """Test suite for build_generation_provider."""

    def test_auto_without_keys_in_dev_mode_is_mock(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
        monkeypatch.setattr(settings, "DEV_MODE", True)

        assert isinstance(build_generation_provider("auto"), MockGenerationProvider)

    def test_auto_without_keys_outside_dev_mode_is_unconfigured(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
        monkeypatch.setattr(settings, "DEV_MODE", False)

        assert isinstance(build_generation_provider("auto"), UnconfiguredGenerationProvider)

    def test_openai_without_key_is_unconfigured(self, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

        assert isinstance(build_generation_provider("openai"), UnconfiguredGenerationProvider)


class TestProviders:
    """Test suite for the offline providers."""

    @pytest.mark.asyncio
    async def test_mock_email_draft_has_subject(self):
        prompt = build_prompt(LeadData(name="Ana", company="Acme"), "email", "cold_outreach", "professional")

        raw = await MockGenerationProvider().complete(prompt)

        draft = json.loads(raw)
        assert "Acme" in draft["subject"]
        assert draft["content"].startswith("Hi Ana")

    @pytest.mark.asyncio
    async def test_mock_non_email_draft_has_no_subject(self):
        prompt = build_prompt(LeadData(name="Ana"), "sms", "follow_up", "friendly")

        draft = json.loads(await MockGenerationProvider().complete(prompt))

        assert draft["subject"] is None

    @pytest.mark.asyncio
    async def test_unconfigured_always_fails(self):
        prompt = build_prompt(LeadData(name="Ana"), "sms", "follow_up", "friendly")

        with pytest.raises(GenerationUnavailableError):
            await UnconfiguredGenerationProvider().complete(prompt)


class TestPrompts:
    """Test suite for prompt construction."""

    def test_fallbacks_for_missing_fields(self):
        prompt = build_prompt(LeadData(name="Ana"), "email", "meeting_request", "professional")

        assert "their company" in prompt.user
        assert "general business" in prompt.system
        assert "meeting request" in prompt.user
        assert "Additional instructions" not in prompt.user

    def test_blank_custom_prompt_ignored(self):
        prompt = build_prompt(LeadData(name="Ana"), "email", "follow_up", "direct", "   ")

        assert "Additional instructions" not in prompt.user


def _chat_completion(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


def _openai_provider(handler):
    """OpenAI provider whose HTTP traffic goes to ``handler``; returns it with the request log."""
    requests = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    provider = OpenAIGenerationProvider(api_key="sk-test")
    provider.client = provider.client.with_options(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(record))
    )
    return provider, requests


def _prompt():
    return build_prompt(LeadData(name="Ana", company="Acme"), "email", "cold_outreach", "professional")


class TestOpenAIProvider:
    """Test suite for the OpenAI provider over a mocked HTTP transport."""

    @pytest.mark.asyncio
    async def test_returns_message_content(self):
        provider, requests = _openai_provider(
            lambda request: httpx.Response(200, json=_chat_completion('{"subject": "S", "content": "C"}'))
        )

        raw = await provider.complete(_prompt())

        assert json.loads(raw) == {"subject": "S", "content": "C"}
        body = json.loads(requests[0].content)
        assert body["response_format"] == {"type": "json_object"}
        assert body["messages"][0]["role"] == "system"

    @pytest.mark.asyncio
    async def test_server_error_is_single_attempt(self):
        provider, requests = _openai_provider(
            lambda request: httpx.Response(500, json={"error": {"message": "upstream failure"}})
        )

        with pytest.raises(GenerationUnavailableError):
            await provider.complete(_prompt())

        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_empty_content_is_unavailable(self):
        provider, requests = _openai_provider(
            lambda request: httpx.Response(200, json=_chat_completion(None))
        )

        with pytest.raises(GenerationUnavailableError):
            await provider.complete(_prompt())

        assert len(requests) == 1


class _GeminiResponse:
    def __init__(self, text=None, blocked=False):
        self._text = text
        self._blocked = blocked

    @property
    def text(self):
        if self._blocked:
            raise ValueError("The candidate was blocked by safety settings")
        return self._text


class TestGeminiProvider:
    """Test suite for the Gemini provider with the SDK call patched."""

    def _patch(self, monkeypatch, outcome):
        calls = []

        async def generate_content_async(model, contents, **kwargs):
            calls.append(kwargs)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        monkeypatch.setattr(genai.GenerativeModel, "generate_content_async", generate_content_async)
        return calls

    @pytest.mark.asyncio
    async def test_returns_text_without_sdk_retry(self, monkeypatch):
        calls = self._patch(monkeypatch, _GeminiResponse('{"subject": null, "content": "C"}'))

        raw = await GeminiGenerationProvider(api_key="test-key").complete(_prompt())

        assert json.loads(raw)["content"] == "C"
        assert len(calls) == 1
        assert calls[0]["request_options"]["retry"] is None

    @pytest.mark.asyncio
    async def test_api_error_is_unavailable(self, monkeypatch):
        calls = self._patch(monkeypatch, ServiceUnavailable("overloaded"))

        with pytest.raises(GenerationUnavailableError):
            await GeminiGenerationProvider(api_key="test-key").complete(_prompt())

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self, monkeypatch):
        self._patch(monkeypatch, InternalServerError("HTTP 500"))

        with pytest.raises(GenerationUnavailableError):
            await GeminiGenerationProvider(api_key="test-key").complete(_prompt())

    @pytest.mark.asyncio
    async def test_blocked_candidate_is_unavailable(self, monkeypatch):
        self._patch(monkeypatch, _GeminiResponse(blocked=True))

        with pytest.raises(GenerationUnavailableError):
            await GeminiGenerationProvider(api_key="test-key").complete(_prompt())

    @pytest.mark.asyncio
    async def test_empty_text_is_unavailable(self, monkeypatch):
        self._patch(monkeypatch, _GeminiResponse(""))

        with pytest.raises(GenerationUnavailableError):
            await GeminiGenerationProvider(api_key="test-key").complete(_prompt())
