"""Test the draft generation endpoints."""

import pytest

from outreach_crm.core.exceptions import GenerationUnavailableError


class TestGenerateMessageEndpoint:
    """Test suite for POST /api/generate-message."""

    @pytest.mark.asyncio
    async def test_camel_case_request(self, client, auth_headers, provider):
        provider.reply = '{"subject": "About Acme", "content": "Hi Ana"}'

        response = await client.post(
            "/api/generate-message",
            json={
                "leadData": {"name": "Ana", "company": "Acme", "title": "CTO", "industry": "Fintech"},
                "channel": "email",
                "messageType": "cold_outreach",
                "tone": "direct",
                "customPrompt": "Keep it short",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"subject": "About Acme", "content": "Hi Ana"}
        assert "Keep it short" in provider.prompts[0].user

    @pytest.mark.asyncio
    async def test_provider_failure_is_502(self, client, auth_headers, provider):
        provider.error = GenerationUnavailableError("HTTP 500", provider="OpenAI")

        response = await client.post(
            "/api/generate-message",
            json={"leadData": {"name": "Ana"}, "channel": "sms", "messageType": "follow_up", "tone": "friendly"},
            headers=auth_headers,
        )

        assert response.status_code == 502
        messages = await client.get("/api/messages/", headers=auth_headers)
        assert messages.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_blank_lead_name_rejected(self, client, auth_headers, provider):
        response = await client.post(
            "/api/generate-message",
            json={"leadData": {"name": "  "}, "channel": "sms", "messageType": "follow_up", "tone": "friendly"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert provider.prompts == []

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client, provider):
        response = await client.post(
            "/api/generate-message",
            json={"leadData": {"name": "Ana"}, "channel": "sms", "messageType": "follow_up", "tone": "friendly"},
        )

        assert response.status_code == 401


class TestDraftsEndpoints:
    """Test suite for /api/drafts and /api/drafts/save."""

    @pytest.mark.asyncio
    async def test_generator_draft_then_save(self, client, auth_headers, provider):
        provider.reply = "Plain text reply"

        lead = await client.post(
            "/api/leads/", json={"name": "Ana", "company": "Acme"}, headers=auth_headers
        )
        lead_id = lead.json()["id"]

        response = await client.post(
            "/api/drafts", json={"lead_id": lead_id, "channel": "email"}, headers=auth_headers
        )
        assert response.status_code == 200
        draft = response.json()
        assert draft["strategy"] == "generator"
        assert draft["subject"] == "Quick question about Acme"
        assert draft["content"] == "Plain text reply"

        messages = await client.get("/api/messages/", headers=auth_headers)
        assert messages.json()["total"] == 0

        response = await client.post(
            "/api/drafts/save",
            json={
                "lead_id": lead_id,
                "channel": draft["channel"],
                "message_type": draft["message_type"],
                "subject": draft["subject"],
                "content": draft["content"],
                "ai_generated": draft["ai_generated"],
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["ai_generated"] is True

        messages = await client.get("/api/messages/", headers=auth_headers)
        item = messages.json()["items"][0]
        assert item["lead_name"] == "Ana"
        assert item["status"] == "draft"

    @pytest.mark.asyncio
    async def test_template_draft(self, client, auth_headers, provider):
        template = await client.post(
            "/api/templates/",
            json={
                "name": "LinkedIn intro",
                "channel": "linkedin",
                "message_type": "cold_outreach",
                "content_template": "Hi {{name}}, fellow {{industry}} person here.",
            },
            headers=auth_headers,
        )

        response = await client.post(
            "/api/drafts",
            json={"lead": {"name": "Ana", "industry": "Fintech"}, "template_id": template.json()["id"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        draft = response.json()
        assert draft["strategy"] == "template"
        assert draft["ai_generated"] is False
        assert draft["channel"] == "linkedin"
        assert draft["subject"] is None
        assert draft["content"] == "Hi Ana, fellow Fintech person here."
        assert provider.prompts == []

    @pytest.mark.asyncio
    async def test_missing_lead_is_422(self, client, auth_headers, provider):
        response = await client.post("/api/drafts", json={"channel": "email"}, headers=auth_headers)

        assert response.status_code == 422
