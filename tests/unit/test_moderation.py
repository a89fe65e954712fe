from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest

from app.exceptions import ApplicationError, UserError
from app.pipelines.moderation import moderate_content


@pytest.mark.anyio
async def test_moderate_content_passes_clean_query(mock_http_client) -> None:
    """A query that is not flagged should return the moderation result."""
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        assert request.url.path == "/v1/moderations"
        return httpx.Response(200, json={"results": [{"flagged": False, "categories": {"hate": False}}]})

    with patch("app.pipelines.moderation.get_openai_client", return_value=mock_http_client(handler)):
        result = await moderate_content("what is an embedding?")

    assert result.flagged is False
    assert seen == [{"input": "what is an embedding?"}]


@pytest.mark.anyio
async def test_moderate_content_flagged_raises_user_error(mock_http_client) -> None:
    """A flagged query should raise UserError carrying the categories."""
    categories = {"hate": True, "violence": False}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [{"flagged": True, "categories": categories}]})

    with (
        patch("app.pipelines.moderation.get_openai_client", return_value=mock_http_client(handler)),
        pytest.raises(UserError) as exc_info,
    ):
        await moderate_content("something hateful")

    assert exc_info.value.message == "Flagged content"
    assert exc_info.value.data == {"flagged": True, "categories": categories}


@pytest.mark.anyio
async def test_moderate_content_service_error_is_application_error(mock_http_client) -> None:
    """A non-200 moderation response is the application's problem, not the user's."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": {"message": "overloaded"}})

    with (
        patch("app.pipelines.moderation.get_openai_client", return_value=mock_http_client(handler)),
        pytest.raises(ApplicationError) as exc_info,
    ):
        await moderate_content("hello")

    assert exc_info.value.data["status"] == 503


@pytest.mark.anyio
@pytest.mark.parametrize("body", [{"results": []}, {"id": "modr-1"}, {"results": [{"categories": {}}]}])
async def test_moderate_content_malformed_body_raises_application_error(body: dict, mock_http_client) -> None:
    """A 200 response without a usable result should be an ApplicationError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with (
        patch("app.pipelines.moderation.get_openai_client", return_value=mock_http_client(handler)),
        pytest.raises(ApplicationError) as exc_info,
    ):
        await moderate_content("hello")

    assert exc_info.value.message == "Failed to moderate content"
