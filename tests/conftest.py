"""Test fixtures for the storage backend.

The Supabase client is replaced with an in-memory fake; no network needed.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.core.dependencies import get_session_client_factory
from app.core.rate_limit import limiter
from app.database.supabase_client import get_service_supabase
from app.main import app
from tests.fakes import FakeSupabase

# Rate limits are switched on only by the tests that exercise them.
limiter.enabled = False


@pytest.fixture
def supabase() -> FakeSupabase:
    fake = FakeSupabase()
    app.dependency_overrides[get_service_supabase] = lambda: fake
    app.dependency_overrides[get_session_client_factory] = lambda: (lambda: fake)
    yield fake
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(supabase: FakeSupabase) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://test") as c:
        yield c


@pytest.fixture
def user(supabase: FakeSupabase) -> dict:
    return supabase.seed_user(
        email="ada@example.com",
        full_name="Ada Lovelace",
        city="London",
        avatar=settings.avatar_placeholder_url,
    )


@pytest.fixture
def auth_headers(supabase: FakeSupabase, user: dict) -> dict:
    """Cookie header for a signed-in session of ``user``."""
    token = supabase.auth.issue_session(user["account_id"])
    return {"Cookie": f"{settings.session_cookie_name}={token}"}


@pytest.fixture
def rate_limited():
    """Enable the limiter with empty counters for one test."""
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()
