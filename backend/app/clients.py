from __future__ import annotations

import httpx
import structlog

from app.config import settings

logger = structlog.get_logger()

_openai_client: httpx.AsyncClient | None = None
_supabase_client: httpx.AsyncClient | None = None


def get_openai_client() -> httpx.AsyncClient:
    """Get or create the singleton client for the OpenAI-compatible API.

    Returns:
        The shared AsyncClient with base URL and bearer auth applied. Created
        on first call and reused on subsequent calls (singleton pattern).
    """
    global _openai_client
    if _openai_client is None:
        _openai_client = httpx.AsyncClient(
            base_url=settings.OPENAI_BASE_URL,
            headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY.get_secret_value()}"},
            timeout=settings.HTTP_TIMEOUT,
        )
        logger.info("openai_client_created", base_url=settings.OPENAI_BASE_URL)
    return _openai_client


def get_supabase_client() -> httpx.AsyncClient:
    """Get or create the singleton PostgREST client for the vector store.

    Returns:
        The shared AsyncClient pointed at ``{SUPABASE_URL}/rest/v1`` with the
        service role key sent as both ``apikey`` and bearer token.
    """
    global _supabase_client
    if _supabase_client is None:
        key = settings.SUPABASE_SERVICE_ROLE_KEY.get_secret_value()
        _supabase_client = httpx.AsyncClient(
            base_url=f"{settings.SUPABASE_URL.rstrip('/')}/rest/v1",
            headers={"apikey": key, "Authorization": f"Bearer {key}"},
            timeout=settings.HTTP_TIMEOUT,
        )
        logger.info("supabase_client_created", url=settings.SUPABASE_URL)
    return _supabase_client


def response_detail(response: httpx.Response) -> dict[str, object]:
    """Summarise a non-success collaborator response for server-side logs."""
    try:
        body: object = response.json()
    except ValueError:
        body = response.text[:500]
    return {"status": response.status_code, "body": body}


async def close_clients() -> None:
    """Close all singleton clients. Called on app shutdown."""
    global _openai_client, _supabase_client
    if _openai_client:
        await _openai_client.aclose()
        _openai_client = None
        logger.info("openai_client_closed")
    if _supabase_client:
        await _supabase_client.aclose()
        _supabase_client = None
        logger.info("supabase_client_closed")
