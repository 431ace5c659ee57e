"""Test lead and campaign endpoints."""

import pytest


class TestAuthAPI:
    """Test suite for registration and login."""

    @pytest.mark.asyncio
    async def test_me(self, client, auth_headers):
        response = await client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "api-user@acme.io"
        assert response.json()["display_name"] == "Api User"

    @pytest.mark.asyncio
    async def test_duplicate_registration_is_409(self, client, auth_headers):
        response = await client.post(
            "/api/auth/register", json={"email": "api-user@acme.io", "password": "password123"}
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, client, auth_headers):
        response = await client.post(
            "/api/auth/login", data={"username": "api-user@acme.io", "password": "wrong-password"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update_profile(self, client, auth_headers):
        response = await client.patch(
            "/api/auth/me", json={"company": "Acme", "industry": "SaaS"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["company"] == "Acme"


class TestLeadsAPI:
    """Test suite for the leads endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, client, auth_headers):
        response = await client.post(
            "/api/leads/",
            json={"name": "  Ana Lopez ", "company": "Acme", "email": "ana@acme.io"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        lead = response.json()
        assert lead["name"] == "Ana Lopez"
        assert lead["status"] == "new"
        assert lead["source"] == "manual"

        response = await client.get(f"/api/leads/{lead['id']}", headers=auth_headers)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_blank_name_is_422(self, client, auth_headers):
        response = await client.post("/api/leads/", json={"name": " "}, headers=auth_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_search_and_stats(self, client, auth_headers):
        for name, company in [("Ana", "Acme"), ("Ben", "Globex"), ("Cleo", "Acme Labs")]:
            await client.post("/api/leads/", json={"name": name, "company": company}, headers=auth_headers)

        response = await client.get("/api/leads/", params={"search": "acme"}, headers=auth_headers)
        assert response.json()["total"] == 2

        response = await client.get("/api/leads/stats", headers=auth_headers)
        assert response.json()["new"] == 3
        assert response.json()["all"] == 3

    @pytest.mark.asyncio
    async def test_update_status(self, client, auth_headers):
        created = await client.post("/api/leads/", json={"name": "Ana"}, headers=auth_headers)

        response = await client.patch(
            f"/api/leads/{created.json()['id']}", json={"status": "qualified"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "qualified"

    @pytest.mark.asyncio
    async def test_unknown_campaign_is_404(self, client, auth_headers):
        response = await client.post(
            "/api/leads/",
            json={"name": "Ana", "campaign_id": "550e8400-e29b-41d4-a716-446655440000"},
            headers=auth_headers,
        )
        assert response.status_code == 404


class TestCampaignsAPI:
    """Test suite for the campaigns endpoints."""

    @pytest.mark.asyncio
    async def test_lifecycle(self, client, auth_headers):
        response = await client.post(
            "/api/campaigns/",
            json={"name": "Q1 Push", "channels": ["email", "linkedin", "email"]},
            headers=auth_headers,
        )
        assert response.status_code == 201
        campaign = response.json()
        assert campaign["status"] == "draft"
        assert campaign["channels"] == ["email", "linkedin"]

        response = await client.post(f"/api/campaigns/{campaign['id']}/resume", headers=auth_headers)
        assert response.status_code == 422

        response = await client.post(f"/api/campaigns/{campaign['id']}/activate", headers=auth_headers)
        assert response.json()["status"] == "active"
        assert response.json()["started_at"] is not None

        response = await client.post(f"/api/campaigns/{campaign['id']}/pause", headers=auth_headers)
        assert response.json()["status"] == "paused"

        response = await client.post(f"/api/campaigns/{campaign['id']}/resume", headers=auth_headers)
        assert response.json()["status"] == "active"

        response = await client.delete(f"/api/campaigns/{campaign['id']}", headers=auth_headers)
        assert response.status_code == 422

        response = await client.post(f"/api/campaigns/{campaign['id']}/complete", headers=auth_headers)
        assert response.json()["status"] == "completed"

    @pytest.mark.asyncio
    async def test_detail_counts(self, client, auth_headers):
        created = await client.post("/api/campaigns/", json={"name": "Q2"}, headers=auth_headers)
        campaign_id = created.json()["id"]
        lead = await client.post(
            "/api/leads/", json={"name": "Ana", "campaign_id": campaign_id}, headers=auth_headers
        )
        await client.post(
            "/api/messages/",
            json={"lead_id": lead.json()["id"], "campaign_id": campaign_id, "channel": "sms", "content": "Hi"},
            headers=auth_headers,
        )

        response = await client.get(f"/api/campaigns/{campaign_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["leads_count"] == 1
        assert response.json()["messages_count"] == 1

    @pytest.mark.asyncio
    async def test_delete_draft(self, client, auth_headers):
        created = await client.post("/api/campaigns/", json={"name": "Throwaway"}, headers=auth_headers)

        response = await client.delete(f"/api/campaigns/{created.json()['id']}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get("/api/campaigns/", headers=auth_headers)
        assert response.json()["total"] == 0
