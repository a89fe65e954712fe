from __future__ import annotations

import httpx
import structlog

from app.clients import get_openai_client, response_detail
from app.exceptions import ApplicationError, UserError
from app.metrics import moderation_flagged_total
from app.schemas.search import ModerationResult

logger = structlog.get_logger()


async def moderate_content(query: str) -> ModerationResult:
    """Run the query through the moderation endpoint.

    Args:
        query: The trimmed user question.

    Returns:
        The moderation result for a query that was not flagged.

    Raises:
        UserError: If the query is flagged; ``data`` carries ``flagged`` and the
            category mapping.
        ApplicationError: If the moderation service fails or is unreachable.
    """
    client = get_openai_client()
    try:
        response = await client.post("/moderations", json={"input": query})
    except httpx.HTTPError as exc:
        raise ApplicationError("Failed to moderate content", {"error": str(exc)}) from exc

    if response.status_code != 200:
        raise ApplicationError("Failed to moderate content", response_detail(response))

    try:
        moderation = ModerationResult.model_validate(response.json()["results"][0])
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise ApplicationError("Failed to moderate content", {"error": str(exc)}) from exc

    if moderation.flagged:
        moderation_flagged_total.inc()
        flagged_categories = [name for name, hit in moderation.categories.items() if hit]
        logger.warning("moderation_flagged", categories=flagged_categories, query_preview=query[:100])
        raise UserError(
            "Flagged content",
            {"flagged": True, "categories": moderation.categories},
        )

    return moderation
