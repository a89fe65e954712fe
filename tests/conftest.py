from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

# ---------------------------------------------------------------------------
# Settings are read once at import time, so test overrides must be in the
# environment before any app module is imported.
# ---------------------------------------------------------------------------

os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("OPENAI_BASE_URL", "https://llm.test/v1")
os.environ.setdefault("SUPABASE_URL", "https://db.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from app.main import app  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    """Configure anyio to use the asyncio backend for all async tests."""
    return "asyncio"


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client for API integration tests.

    Yields an ``AsyncClient`` wired directly to the FastAPI ASGI app so no
    real network socket is required during testing.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
