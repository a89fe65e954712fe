from __future__ import annotations

import time

import anyio
import structlog
from fastapi import APIRouter, Request
from fastapi.responses import Response, StreamingResponse
from pydantic import ValidationError
from starlette.types import Receive, Scope, Send

from app.config import settings
from app.exceptions import UserError, error_response
from app.metrics import search_prepare_duration
from app.middleware.rate_limit import limiter
from app.pipelines.context import build_context
from app.pipelines.embedding import create_embedding
from app.pipelines.moderation import moderate_content
from app.pipelines.prompt import generate_prompt
from app.pipelines.retrieval import match_page_sections
from app.pipelines.streaming import CompletionStream, start_completion_stream
from app.schemas.search import ErrorResponse, SearchRequest

logger = structlog.get_logger()
router = APIRouter(tags=["search"])


class CompletionResponse(StreamingResponse):
    """Plain-text relay of a completion stream that always releases the upstream.

    The upstream is closed once the response finishes, including when the
    client disconnects mid-stream (cancelled relay or ``send`` failing).
    """

    def __init__(self, completion: CompletionStream) -> None:
        super().__init__(completion, media_type="text/plain; charset=utf-8")
        self.completion = completion

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            with anyio.CancelScope(shield=True):
                await self.completion.aclose()


def _search_rate_limit() -> str:
    return settings.RATE_LIMIT_SEARCH


async def _parse_query(request: Request) -> str:
    """Read the JSON body and return the trimmed ``prompt`` field."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise UserError("Invalid request body: must be a JSON object") from exc

    try:
        body = SearchRequest.model_validate(payload)
    except ValidationError as exc:
        raise UserError("Invalid query: must be a non-empty string") from exc

    return body.prompt


@router.post(
    "/vector-search",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Streamed answer text"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@limiter.limit(_search_rate_limit)
async def vector_search(request: Request) -> Response:
    """Answer a documentation question with a streamed completion.

    Moderates the question, embeds it, fetches matching page sections, builds a
    token-budgeted prompt and relays the chat completion as plain text. Every
    step runs in sequence; the first failure aborts the request and is mapped to
    a single JSON error response before any body is streamed.

    Args:
        request: The raw request; the body must be ``{"prompt": "<question>"}``.

    Returns:
        A StreamingResponse of answer text, or a JSONResponse on error.
    """
    start_time = time.perf_counter()
    try:
        query = await _parse_query(request)
        logger.info("vector_search_started", query_length=len(query))

        await moderate_content(query)
        embedding = await create_embedding(query)
        sections = await match_page_sections(embedding)
        context_text = build_context(sections)
        prompt = generate_prompt(context_text, query)
        completion = await start_completion_stream(prompt)
    except Exception as exc:
        return error_response(exc)
    finally:
        search_prepare_duration.observe(time.perf_counter() - start_time)

    return CompletionResponse(completion)
