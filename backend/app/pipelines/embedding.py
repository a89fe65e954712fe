from __future__ import annotations

import time

import httpx
import structlog

from app.clients import get_openai_client, response_detail
from app.config import settings
from app.exceptions import ApplicationError
from app.metrics import embedding_duration

logger = structlog.get_logger()


async def create_embedding(query: str) -> list[float]:
    """Embed the query with the configured embedding model.

    Newlines are replaced with spaces before the text is sent.

    Args:
        query: The trimmed user question.

    Returns:
        The embedding vector for the query.

    Raises:
        ApplicationError: If the embedding service fails or is unreachable.
    """
    client = get_openai_client()
    start_time = time.perf_counter()
    try:
        response = await client.post(
            "/embeddings",
            json={"model": settings.EMBEDDING_MODEL, "input": query.replace("\n", " ")},
        )
    except httpx.HTTPError as exc:
        raise ApplicationError("Failed to create embedding for question", {"error": str(exc)}) from exc
    finally:
        embedding_duration.observe(time.perf_counter() - start_time)

    if response.status_code != 200:
        raise ApplicationError("Failed to create embedding for question", response_detail(response))

    try:
        embedding: list[float] = response.json()["data"][0]["embedding"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise ApplicationError("Failed to create embedding for question", {"error": str(exc)}) from exc

    logger.debug("embedding_created", model=settings.EMBEDDING_MODEL, dimension=len(embedding))
    return embedding
