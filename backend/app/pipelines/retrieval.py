from __future__ import annotations

import time

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from app.clients import get_supabase_client, response_detail
from app.config import settings
from app.exceptions import ApplicationError
from app.metrics import retrieval_duration
from app.schemas.search import PageSection

logger = structlog.get_logger()

_sections_adapter = TypeAdapter(list[PageSection])


async def match_page_sections(embedding: list[float]) -> list[PageSection]:
    """Call the ``match_page_sections`` RPC on the vector store.

    The RPC ranks sections by similarity, drops anything under the match
    threshold or shorter than the minimum content length, and caps the result
    at the match count.

    Args:
        embedding: The query embedding.

    Returns:
        Page sections ordered by descending similarity.

    Raises:
        ApplicationError: On any transport error, non-success status or
            unparseable payload from the RPC.
    """
    client = get_supabase_client()
    payload = {
        "embedding": embedding,
        "match_threshold": settings.MATCH_THRESHOLD,
        "match_count": settings.MATCH_COUNT,
        "min_content_length": settings.MIN_CONTENT_LENGTH,
    }

    start_time = time.perf_counter()
    try:
        response = await client.post("/rpc/match_page_sections", json=payload)
    except httpx.HTTPError as exc:
        raise ApplicationError("Failed to match page sections", {"error": str(exc)}) from exc
    finally:
        retrieval_duration.observe(time.perf_counter() - start_time)

    if response.status_code != 200:
        raise ApplicationError("Failed to match page sections", response_detail(response))

    try:
        sections = _sections_adapter.validate_python(response.json())
    except (ValueError, ValidationError) as exc:
        raise ApplicationError("Failed to match page sections", {"error": str(exc)}) from exc

    logger.info(
        "sections_matched",
        count=len(sections),
        top_similarity=sections[0].similarity if sections else None,
    )
    return sections
