"""Test the message record store."""

import pytest
from sqlmodel import select

from outreach_crm.core.exceptions import NotFoundError, ValidationError
from outreach_crm.models.campaign import Campaign
from outreach_crm.models.lead import Lead
from outreach_crm.models.outreach import Message
from outreach_crm.schemas.outreach import MessageCreate, MessageFilter
from outreach_crm.services.message_service import MessageService


async def _add(session, obj):
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj


class TestMessageService:
    """Test suite for MessageService."""

    @pytest.mark.asyncio
    async def test_create_returns_record_with_id(self, session, user):
        service = MessageService(session)

        message = await service.create_message(
            user.id,
            MessageCreate(channel="email", subject="Hi", content="Hello Ana", ai_generated=True)
        )

        assert message.id is not None
        assert message.created_at is not None
        assert message.status == "draft"
        assert message.ai_generated is True
        assert message.subject == "Hi"

    @pytest.mark.asyncio
    async def test_missing_content_rejected_without_write(self, session, user):
        service = MessageService(session)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_message(user.id, MessageCreate(channel="linkedin", content="   "))

        assert exc_info.value.field == "content"
        result = await session.exec(select(Message))
        assert result.all() == []

    @pytest.mark.asyncio
    async def test_missing_channel_rejected(self, session, user):
        service = MessageService(session)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_message(user.id, MessageCreate(content="Hello"))

        assert exc_info.value.field == "channel"

    @pytest.mark.asyncio
    async def test_subject_dropped_for_non_email(self, session, user):
        service = MessageService(session)

        message = await service.create_message(
            user.id, MessageCreate(channel="sms", subject="Ignored", content="Hello")
        )

        assert message.subject is None

    @pytest.mark.asyncio
    async def test_other_owners_lead_not_found(self, session, user, other_user):
        lead = await _add(session, Lead(owner_id=other_user.id, name="Ana"))
        service = MessageService(session)

        with pytest.raises(NotFoundError):
            await service.create_message(
                user.id, MessageCreate(lead_id=lead.id, channel="email", content="Hello")
            )

    @pytest.mark.asyncio
    async def test_list_newest_first_with_names(self, session, user):
        lead = await _add(session, Lead(owner_id=user.id, name="Ana", company="Acme"))
        campaign = await _add(session, Campaign(owner_id=user.id, name="Q1 Push"))
        service = MessageService(session)

        first = await service.create_message(
            user.id,
            MessageCreate(lead_id=lead.id, campaign_id=campaign.id, channel="linkedin", content="One")
        )
        second = await service.create_message(user.id, MessageCreate(channel="sms", content="Two"))

        page = await service.list_messages(user.id)

        assert page["total"] == 2
        assert [item["id"] for item in page["items"]] == [second.id, first.id]
        linked = page["items"][1]
        assert linked["lead_name"] == "Ana"
        assert linked["lead_company"] == "Acme"
        assert linked["campaign_name"] == "Q1 Push"
        assert page["items"][0]["lead_name"] is None

    @pytest.mark.asyncio
    async def test_list_filters_and_scopes_by_owner(self, session, user, other_user):
        service = MessageService(session)
        await service.create_message(user.id, MessageCreate(channel="email", content="Mine"))
        await service.create_message(user.id, MessageCreate(channel="sms", content="Also mine"))
        await service.create_message(other_user.id, MessageCreate(channel="email", content="Theirs"))

        page = await service.list_messages(user.id, MessageFilter(channel="email"))

        assert page["total"] == 1
        assert page["items"][0]["content"] == "Mine"

    @pytest.mark.asyncio
    async def test_mark_sent_stamps_and_contacts_lead(self, session, user):
        lead = await _add(session, Lead(owner_id=user.id, name="Ana"))
        service = MessageService(session)
        message = await service.create_message(
            user.id, MessageCreate(lead_id=lead.id, channel="email", content="Hello")
        )

        updated = await service.update_status(user.id, message.id, "sent")

        assert updated.status == "sent"
        assert updated.sent_at is not None
        assert updated.content == "Hello"
        await session.refresh(lead)
        assert lead.status == "contacted"
        assert lead.last_contacted_at is not None

    @pytest.mark.asyncio
    async def test_stats(self, session, user):
        service = MessageService(session)
        message = await service.create_message(user.id, MessageCreate(channel="email", content="A"))
        await service.create_message(user.id, MessageCreate(channel="email", content="B"))
        await service.update_status(user.id, message.id, "replied")

        stats = await service.get_stats(user.id)

        assert stats["draft"] == 1
        assert stats["replied"] == 1
        assert stats["sent"] == 0


class TestMessagesAPI:
    """Test suite for the messages endpoints."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/api/messages/")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_and_list(self, client, auth_headers):
        response = await client.post(
            "/api/messages/",
            json={"channel": "linkedin", "message_type": "follow_up", "content": "Checking in"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["status"] == "draft"

        response = await client.get("/api/messages/", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["content"] == "Checking in"

    @pytest.mark.asyncio
    async def test_blank_content_is_422(self, client, auth_headers):
        response = await client.post(
            "/api/messages/",
            json={"channel": "email", "content": ""},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert "content" in response.json()["detail"]

        response = await client.get("/api/messages/", headers=auth_headers)
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_update_status(self, client, auth_headers):
        created = await client.post(
            "/api/messages/",
            json={"channel": "email", "subject": "Hi", "content": "Hello"},
            headers=auth_headers,
        )
        message_id = created.json()["id"]

        response = await client.patch(
            f"/api/messages/{message_id}/status",
            json={"status": "opened"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "opened"
        assert response.json()["opened_at"] is not None
