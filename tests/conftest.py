"""Shared fixtures: in-memory database, API client and a scripted generation provider."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AI_PROVIDER", "mock")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import outreach_crm.models  # noqa: F401
from outreach_crm.core.security import get_password_hash
from outreach_crm.database import get_session
from outreach_crm.main import app
from outreach_crm.models.user import User
from outreach_crm.services.integrations.base import GenerationPrompt, TextGenerationProvider
from outreach_crm.services.integrations.generation import set_generation_provider


class ScriptedProvider(TextGenerationProvider):
    """Returns a fixed reply, or fails, and records every prompt it sees."""

    name = "scripted"

    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[GenerationPrompt] = []

    async def complete(self, prompt: GenerationPrompt) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """Session bound to the test database."""
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def user(session):
    """A registered owner."""
    user = User(email="owner@acme.io", password_hash=get_password_hash("password123"))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def other_user(session):
    """A second owner whose records must stay invisible to ``user``."""
    user = User(email="someone-else@acme.io", password_hash=get_password_hash("password123"))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
def provider():
    """Scripted provider installed as the process-wide generation provider."""
    scripted = ScriptedProvider(reply='{"subject": "Hello", "content": "Hi there"}')
    set_generation_provider(scripted)
    yield scripted
    set_generation_provider(None)


@pytest_asyncio.fixture
async def client(engine):
    """API client with the database dependency pointed at the test engine."""
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_headers(client):
    """Register and log in through the API, returning bearer headers."""
    await client.post(
        "/api/auth/register",
        json={"email": "api-user@acme.io", "password": "password123", "display_name": "Api User"},
    )
    response = await client.post(
        "/api/auth/login",
        data={"username": "api-user@acme.io", "password": "password123"},
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}

