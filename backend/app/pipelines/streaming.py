from __future__ import annotations

import json
from collections.abc import AsyncIterator

import httpx
import structlog

from app.clients import get_openai_client, response_detail
from app.config import settings
from app.exceptions import ApplicationError

logger = structlog.get_logger()


class CompletionStream:
    """Text deltas of a streamed chat completion.

    Wraps an open ``httpx`` streaming response whose status has already been
    checked. Iterating yields each non-empty ``delta.content`` from the
    OpenAI-compatible SSE stream until ``data: [DONE]`` or until the upstream
    closes. ``aclose`` releases the upstream connection and is safe to call
    more than once.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    async def __aiter__(self) -> AsyncIterator[str]:
        token_count = 0
        try:
            async for raw_line in self._response.aiter_lines():
                line: str = raw_line.decode() if isinstance(raw_line, bytes) else raw_line
                if not line.startswith("data: "):
                    continue

                data_str = line[6:]  # strip "data: " prefix
                if data_str.strip() == "[DONE]":
                    break

                try:
                    chunk = json.loads(data_str)
                    content = chunk["choices"][0].get("delta", {}).get("content")
                except (json.JSONDecodeError, IndexError, KeyError, TypeError) as exc:
                    logger.warning("streaming_parse_error", error=str(exc), line=line[:100])
                    continue

                if content:
                    token_count += 1
                    yield content
        except httpx.HTTPError as exc:
            # Status is already sent; all we can do is end the body early.
            logger.error("streaming_upstream_error", error=str(exc), chunks_sent=token_count)
        finally:
            await self.aclose()

        logger.info("completion_stream_finished", chunks_sent=token_count)

    async def aclose(self) -> None:
        await self._response.aclose()


async def start_completion_stream(prompt: str) -> CompletionStream:
    """Request a streamed chat completion for a single user message.

    The upstream status is checked before returning so that a failure can
    still be reported as a normal error response.

    Args:
        prompt: Output of ``generate_prompt``.

    Returns:
        A CompletionStream over the open upstream response.

    Raises:
        ApplicationError: If the completion request fails or is unreachable.
    """
    payload: dict[str, object] = {
        "model": settings.CHAT_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": settings.MAX_TOKENS,
        "temperature": settings.TEMPERATURE,
        "stream": True,
    }

    client = get_openai_client()
    request = client.build_request(
        "POST",
        "/chat/completions",
        json=payload,
        timeout=settings.LLM_STREAM_TIMEOUT,
    )

    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as exc:
        raise ApplicationError("Failed to generate completion", {"error": str(exc)}) from exc

    if response.status_code != 200:
        try:
            await response.aread()
            detail = response_detail(response)
        finally:
            await response.aclose()
        raise ApplicationError("Failed to generate completion", detail)

    logger.info("completion_stream_started", model=settings.CHAT_MODEL)
    return CompletionStream(response)
